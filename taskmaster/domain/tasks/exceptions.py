# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskmaster.shared.errors.base import NotFoundError, ValidationError


class TaskNotFoundError(NotFoundError):
    """No task with this id exists for the calling user."""

    code = "task_not_found"

    def __init__(self, task_id: int | str) -> None:
        super().__init__(context={"task_id": task_id})
        self.task_id = task_id


class TitleRequiredError(ValidationError):
    code = "title_required"
