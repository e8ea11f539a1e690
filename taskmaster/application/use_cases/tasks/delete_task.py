# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from taskmaster.domain.tasks import TaskNotFoundError, TaskRepository


class DeleteTaskUseCase:
    def __init__(self, *, tasks: TaskRepository) -> None:
        self._tasks = tasks

    def execute(self, user_id: int, task_id: int) -> None:
        if not self._tasks.delete(user_id, task_id):
            raise TaskNotFoundError(task_id)
