from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from taskmaster.domain.tasks import TaskPriority, TaskStatus


class CreateTaskRequestDTO(BaseModel):
    """Body of ``POST /api/tasks``; server-stamped fields are not accepted."""

    model_config = ConfigDict(extra="ignore")

    title: str
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.BACKLOG
    assignee: str = ""
    starred: bool = False
    deadline: str | None = None

    @field_validator("assignee", mode="before")
    @classmethod
    def _assignee(cls, value: object) -> object:
        return "" if value is None else value


class UpdateTaskRequestDTO(BaseModel):
    """Body of ``PATCH /api/tasks/<id>``; use ``changes()`` to get only the sent keys."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assignee: str | None = None
    starred: bool | None = None
    deadline: str | None = None

    @field_validator("priority", "status", "starred", mode="after")
    @classmethod
    def _not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, object]:
        values = self.model_dump(exclude_unset=True)
        if values.get("assignee", "") is None:
            values["assignee"] = ""
        return values
