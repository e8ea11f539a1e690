# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Explicit client-side state: the task cache and everything rendered from it."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from taskmaster.domain.tasks import BOARD_COLUMNS, DeadlineState, TaskPriority, TaskStatus

from .schemas import TaskSchema, UserSchema


@dataclass(slots=True)
class ClientTask:
    """Local, mutable copy of a server task record."""

    id: int
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.BACKLOG
    assignee: str = ""
    starred: bool = False
    created_at: datetime | None = None
    assigned_at: datetime | None = None
    assigned_at_display: str | None = None
    deadline: datetime | None = None
    completed_at: datetime | None = None
    completed_at_display: str | None = None

    @classmethod
    def from_schema(cls, record: TaskSchema) -> ClientTask:
        task = cls(id=record.id, title=record.title)
        task.merge(record)
        return task

    def merge(self, record: TaskSchema) -> None:
        """Overwrite local fields with the server's copy of the record."""
        self.title = record.title
        self.priority = record.priority
        self.status = record.status
        self.assignee = record.assignee
        self.starred = record.starred
        self.created_at = record.created_at
        self.assigned_at = record.assigned_at
        self.assigned_at_display = record.assigned_at_display
        self.deadline = record.deadline
        self.completed_at = record.completed_at
        self.completed_at_display = record.completed_at_display


@dataclass(slots=True, frozen=True)
class BoardView:
    columns: dict[TaskStatus, tuple[int, ...]]

    @property
    def counts(self) -> dict[TaskStatus, int]:
        return {status: len(self.columns.get(status, ())) for status in BOARD_COLUMNS}


@dataclass(slots=True, frozen=True)
class StatusSummary:
    """Whole-number percentages per column; the four values sum to 100."""

    backlog: int = 0
    in_progress: int = 0
    review: int = 0
    done: int = 100

    @property
    def total(self) -> int:
        return self.backlog + self.in_progress + self.review + self.done


@dataclass(slots=True, frozen=True)
class ActivityItem:
    task_id: int
    title: str
    when: str
    assignee: str


@dataclass(slots=True, frozen=True)
class DeadlineItem:
    task_id: int
    title: str
    deadline: datetime
    state: DeadlineState


@dataclass(slots=True, frozen=True)
class DeadlineBreakdown:
    items: tuple[DeadlineItem, ...] = ()
    overdue: int = 0
    due_soon: int = 0
    upcoming: int = 0


@dataclass(slots=True, frozen=True)
class Views:
    board: BoardView
    summary: StatusSummary
    pinned: tuple[int, ...]
    activity: tuple[ActivityItem, ...]
    deadlines: DeadlineBreakdown
    badges: Mapping[int, DeadlineState] = field(default_factory=dict)


class NoticeKind(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class Notice:
    kind: NoticeKind
    message: str


@dataclass(slots=True)
class ClientState:
    tasks: list[ClientTask] = field(default_factory=list)
    user: UserSchema | None = None
    views: Views | None = None
    notices: list[Notice] = field(default_factory=list)

    def find(self, task_id: int) -> ClientTask | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def drain_notices(self) -> list[Notice]:
        drained, self.notices = self.notices, []
        return drained


__all__ = [
    "ActivityItem",
    "BoardView",
    "ClientState",
    "ClientTask",
    "DeadlineBreakdown",
    "DeadlineItem",
    "Notice",
    "NoticeKind",
    "StatusSummary",
    "Views",
]
