# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from taskmaster.domain.exceptions import InvariantViolation
from taskmaster.domain.tasks import (
    Task,
    TaskDraft,
    TaskPriority,
    TaskRepository,
    TaskStatus,
    TitleRequiredError,
    format_display,
    parse_deadline,
)
from taskmaster.domain.tasks.timestamps import utc_now


class CreateTaskUseCase:
    def __init__(
        self,
        *,
        tasks: TaskRepository,
        display_timezone: str,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._tasks = tasks
        self._tz = display_timezone
        self._clock = clock

    def execute(
        self,
        user_id: int,
        *,
        title: str,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.BACKLOG,
        assignee: str = "",
        starred: bool = False,
        deadline: object = None,
    ) -> Task:
        try:
            draft = TaskDraft(
                title=title,
                priority=priority,
                status=status,
                assignee=assignee,
                starred=bool(starred),
                deadline=parse_deadline(deadline, self._tz) if deadline else None,
            )
        except InvariantViolation as exc:
            raise TitleRequiredError() from exc
        now = self._clock()
        return self._tasks.add(user_id, draft, now=now, display=format_display(now, self._tz))
