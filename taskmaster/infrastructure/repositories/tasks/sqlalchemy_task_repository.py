# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from taskmaster.domain.tasks import Task as DomainTask
from taskmaster.domain.tasks import TaskDraft, TaskPriority, TaskRepository, TaskStatus
from taskmaster.infrastructure.db import session_scope
from taskmaster.infrastructure.db.models import Task


def _to_domain(row: Task) -> DomainTask:
    return DomainTask(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        priority=TaskPriority(row.priority),
        status=TaskStatus(row.status),
        assignee=row.assignee or "",
        starred=bool(row.starred),
        created_at=row.created_at,
        assigned_at=row.assigned_at,
        assigned_at_display=row.assigned_at_display,
        deadline=row.deadline,
        completed_at=row.completed_at,
        completed_at_display=row.completed_at_display,
    )


def _str_value(value: object) -> object:
    # Enum members are stored by value.
    return str(value) if isinstance(value, (TaskStatus, TaskPriority)) else value


class SqlAlchemyTaskRepository(TaskRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_for_user(self, user_id: int) -> Sequence[DomainTask]:
        with session_scope(self._session_factory) as session:
            rows = (
                session.query(Task)
                .filter(Task.user_id == user_id)
                .order_by(Task.id.desc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def add(
        self, user_id: int, draft: TaskDraft, *, now: datetime, display: str
    ) -> DomainTask:
        with session_scope(self._session_factory) as session:
            row = Task(
                user_id=user_id,
                title=draft.title,
                priority=str(draft.priority),
                status=str(draft.status),
                assignee=draft.assignee,
                starred=draft.starred,
                created_at=now,
                assigned_at=now,
                assigned_at_display=display,
                deadline=draft.deadline,
            )
            session.add(row)
            session.flush()
            return _to_domain(row)

    def update(
        self, user_id: int, task_id: int, values: dict[str, object]
    ) -> DomainTask | None:
        with session_scope(self._session_factory) as session:
            row = (
                session.query(Task)
                .filter(Task.id == task_id, Task.user_id == user_id)
                .first()
            )
            if row is None:
                return None
            for key, value in values.items():
                setattr(row, key, _str_value(value))
            session.flush()
            return _to_domain(row)

    def delete(self, user_id: int, task_id: int) -> bool:
        with session_scope(self._session_factory) as session:
            deleted = (
                session.query(Task)
                .filter(Task.id == task_id, Task.user_id == user_id)
                .delete()
            )
            return bool(deleted)
