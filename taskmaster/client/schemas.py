# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Response schemas for every endpoint the client talks to.

Responses are parsed into these models before anything is merged into local
state, so a malformed body is rejected instead of leaking into the board.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from taskmaster.domain.tasks import TaskPriority, TaskStatus


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserSchema(_Schema):
    id: int
    name: str
    email: str


class AuthSchema(_Schema):
    token: str = Field(min_length=1)
    user: UserSchema


class OkSchema(_Schema):
    ok: bool


class TaskSchema(_Schema):
    id: int
    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.BACKLOG
    assignee: str = ""
    starred: bool = False
    user_id: int | None = Field(None, alias="userId")
    created_at: datetime = Field(alias="createdAt")
    assigned_at: datetime | None = Field(None, alias="assignedAt")
    assigned_at_display: str | None = Field(None, alias="assignedAtDisplay")
    deadline: datetime | None = None
    completed_at: datetime | None = Field(None, alias="completedAt")
    completed_at_display: str | None = Field(None, alias="completedAtDisplay")

    @field_validator("created_at", mode="before")
    @classmethod
    def _epoch_millis(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        return value

    @field_validator("assignee", mode="before")
    @classmethod
    def _assignee(cls, value: object) -> object:
        return "" if value is None else value


TASK_LIST = TypeAdapter(list[TaskSchema])

__all__ = ["AuthSchema", "OkSchema", "TASK_LIST", "TaskSchema", "UserSchema"]
