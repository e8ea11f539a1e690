# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Task records and the mutation inputs accepted for them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from taskmaster.domain.exceptions import InvariantViolation


class TaskStatus(StrEnum):
    BACKLOG = "backlog"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


BOARD_COLUMNS: tuple[TaskStatus, ...] = (
    TaskStatus.BACKLOG,
    TaskStatus.IN_PROGRESS,
    TaskStatus.REVIEW,
    TaskStatus.DONE,
)

MUTABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "priority", "status", "assignee", "starred", "deadline"}
)


@dataclass(slots=True, frozen=True)
class Task:
    """A task owned by exactly one user."""

    id: int
    user_id: int
    title: str
    priority: TaskPriority
    status: TaskStatus
    assignee: str
    starred: bool
    created_at: datetime
    assigned_at: datetime
    assigned_at_display: str
    deadline: datetime | None = None
    completed_at: datetime | None = None
    completed_at_display: str | None = None

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "priority": str(self.priority),
            "status": str(self.status),
            "assignee": self.assignee,
            "starred": self.starred,
            "userId": self.user_id,
            "createdAt": int(self.created_at.timestamp() * 1000),
            "assignedAt": _iso(self.assigned_at),
            "assignedAtDisplay": self.assigned_at_display,
            "deadline": _iso(self.deadline) if self.deadline else None,
            "completedAt": _iso(self.completed_at) if self.completed_at else None,
            "completedAtDisplay": self.completed_at_display,
        }


@dataclass(slots=True, frozen=True)
class TaskDraft:
    """Client-controlled fields for a new task; timestamps are stamped server-side."""

    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.BACKLOG
    assignee: str = ""
    starred: bool = False
    deadline: datetime | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise InvariantViolation("title must not be empty", field="title")


@dataclass(slots=True, frozen=True)
class TaskChanges:
    """A partial update; only keys present in ``values`` are applied."""

    values: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.values) - MUTABLE_FIELDS
        if unknown:
            raise InvariantViolation(
                f"immutable fields: {', '.join(sorted(unknown))}", field="changes"
            )
        title = self.values.get("title")
        if "title" in self.values and (not isinstance(title, str) or not title.strip()):
            raise InvariantViolation("title must not be empty", field="title")

    @property
    def moves_to_done(self) -> bool:
        return self.values.get("status") == TaskStatus.DONE

    def __bool__(self) -> bool:
        return bool(self.values)


def _iso(value: datetime) -> str:
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
