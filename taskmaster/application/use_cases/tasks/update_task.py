# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime

from taskmaster.domain.exceptions import InvariantViolation
from taskmaster.domain.tasks import (
    MUTABLE_FIELDS,
    Task,
    TaskChanges,
    TaskNotFoundError,
    TaskRepository,
    TitleRequiredError,
    format_display,
    parse_deadline,
)
from taskmaster.domain.tasks.timestamps import utc_now
from taskmaster.shared.logging import logger


class UpdateTaskUseCase:
    """Apply a partial update to a task owned by ``user_id``.

    Moving a task to ``done`` stamps ``completed_at`` every time, even when the
    task already was done; moving it out of ``done`` leaves the stamp in place.
    """

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

    def _normalize(self, fields: Mapping[str, object]) -> dict[str, object]:
        values = {k: v for k, v in fields.items() if k in MUTABLE_FIELDS}
        if "deadline" in values:
            raw = values["deadline"]
            if not raw:
                values["deadline"] = None
            else:
                parsed = parse_deadline(raw, self._tz)
                if parsed is None:
                    logger.debug(f"tasks.update: ignoring unparseable deadline={raw!r}")
                    del values["deadline"]
                else:
                    values["deadline"] = parsed
        if "starred" in values:
            values["starred"] = bool(values["starred"])
        return values

    def execute(self, user_id: int, task_id: int, fields: Mapping[str, object]) -> Task:
        try:
            changes = TaskChanges(self._normalize(fields))
        except InvariantViolation as exc:
            raise TitleRequiredError() from exc

        values = dict(changes.values)
        if changes.moves_to_done:
            now = self._clock()
            values["completed_at"] = now
            values["completed_at_display"] = format_display(now, self._tz)

        task = self._tasks.update(user_id, task_id, values)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task
