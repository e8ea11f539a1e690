# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

from .entities import Task, TaskDraft


class TaskRepository(Protocol):
    """Every operation is scoped to ``user_id``; other users' rows are invisible."""

    def list_for_user(self, user_id: int) -> Sequence[Task]: ...

    def add(
        self, user_id: int, draft: TaskDraft, *, now: datetime, display: str
    ) -> Task: ...

    def update(self, user_id: int, task_id: int, values: dict[str, object]) -> Task | None: ...

    def delete(self, user_id: int, task_id: int) -> bool: ...
