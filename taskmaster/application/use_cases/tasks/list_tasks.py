# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from taskmaster.domain.tasks import Task, TaskRepository


class ListTasksUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int) -> Sequence[Task]:
        return self._tasks.list_for_user(user_id)
