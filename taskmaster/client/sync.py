# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Keeps the local task cache in step with the server.

Status moves and star toggles are optimistic: the board changes first and the
request follows. A failed move is rolled back; a failed star toggle is not.
Create, edit and delete wait for the server before touching local state.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from taskmaster.domain.tasks import TaskPriority, TaskStatus
from taskmaster.domain.tasks.timestamps import utc_now
from taskmaster.shared.config import load_config
from taskmaster.shared.logging import logger

from .api import ApiError, TaskApiClient
from .state import ClientState, ClientTask, Notice, NoticeKind
from .views import render

RenderHook = Callable[[ClientState], None]


def _deadline_value(deadline: datetime | str) -> str:
    if isinstance(deadline, datetime):
        return deadline.isoformat(timespec="seconds")
    return deadline


class TaskSyncClient:
    def __init__(
        self,
        api: TaskApiClient,
        *,
        state: ClientState | None = None,
        on_render: RenderHook | None = None,
        clock: Callable[[], datetime] = utc_now,
        due_soon: timedelta | None = None,
    ) -> None:
        self._api = api
        self._on_render = on_render
        self._clock = clock
        self._due_soon = due_soon or timedelta(hours=load_config().due_soon_hours)
        self.state = state or ClientState()
        self.state.views = render(self.state, clock(), due_soon=self._due_soon)

    def _rerender(self) -> None:
        self.state.views = render(self.state, self._clock(), due_soon=self._due_soon)
        if self._on_render is not None:
            self._on_render(self.state)

    def _notify(self, kind: NoticeKind, message: str) -> None:
        self.state.notices.append(Notice(kind, message))

    async def load(self) -> ClientState:
        """Fetch the task list; on failure keep whatever was cached before."""
        try:
            records = await self._api.list_tasks()
        except ApiError as exc:
            logger.warning(f"sync.load: keeping {len(self.state.tasks)} cached tasks ({exc.code})")
        else:
            self.state.tasks = [ClientTask.from_schema(record) for record in records]
            logger.debug(f"sync.load: {len(self.state.tasks)} tasks")
            try:
                self.state.user = await self._api.me()
            except ApiError as exc:
                logger.debug(f"sync.load: user unavailable ({exc.code})")
        self._rerender()
        return self.state

    async def move_task(self, task_id: int, status: TaskStatus) -> bool:
        task = self.state.find(task_id)
        if task is None or task.status == status:
            return False

        previous = task.status
        task.status = status
        self._rerender()

        try:
            record = await self._api.update_task(task_id, {"status": str(status)})
        except ApiError as exc:
            logger.info(f"sync.move_task: task {task_id} rolled back to {previous} ({exc.code})")
            task.status = previous
            self._notify(NoticeKind.ERROR, "Failed to update task")
            self._rerender()
            return False

        task.merge(record)
        self._rerender()
        return True

    async def _set_starred(self, task_id: int, starred: bool) -> bool:
        task = self.state.find(task_id)
        if task is None:
            return False
        task.starred = starred
        self._rerender()
        try:
            await self._api.update_task(task_id, {"starred": starred})
        except ApiError as exc:
            logger.info(f"sync.star: task {task_id} not saved ({exc.code})")
            return False
        return True

    async def toggle_star(self, task_id: int) -> bool:
        task = self.state.find(task_id)
        if task is None:
            return False
        return await self._set_starred(task_id, not task.starred)

    async def unpin(self, task_id: int) -> bool:
        return await self._set_starred(task_id, False)

    async def create_task(
        self,
        title: str,
        *,
        priority: TaskPriority = TaskPriority.MEDIUM,
        status: TaskStatus = TaskStatus.BACKLOG,
        assignee: str = "",
        deadline: datetime | str | None = None,
    ) -> ClientTask | None:
        title = title.strip()
        if not title:
            self._notify(NoticeKind.ERROR, "Title is required")
            return None

        payload: dict[str, Any] = {
            "title": title,
            "priority": str(priority),
            "status": str(status),
            "assignee": assignee.strip(),
        }
        if deadline:
            payload["deadline"] = _deadline_value(deadline)

        try:
            record = await self._api.create_task(payload)
        except ApiError as exc:
            logger.info(f"sync.create_task: rejected ({exc.code})")
            self._notify(NoticeKind.ERROR, "Failed to create task")
            return None

        task = ClientTask.from_schema(record)
        self.state.tasks.append(task)
        self._rerender()
        return task

    async def quick_add(
        self, title: str, priority: TaskPriority = TaskPriority.MEDIUM
    ) -> ClientTask | None:
        return await self.create_task(title, priority=priority, status=TaskStatus.BACKLOG)

    async def edit_task(
        self,
        task_id: int,
        *,
        title: str,
        priority: TaskPriority,
        status: TaskStatus,
        assignee: str = "",
        deadline: datetime | str | None = None,
    ) -> bool:
        task = self.state.find(task_id)
        if task is None:
            return False

        fields: dict[str, Any] = {
            "title": title.strip(),
            "priority": str(priority),
            "status": str(status),
            "assignee": assignee.strip(),
        }
        if deadline:
            fields["deadline"] = _deadline_value(deadline)

        try:
            record = await self._api.update_task(task_id, fields)
        except ApiError as exc:
            logger.info(f"sync.edit_task: task {task_id} not saved ({exc.code})")
            self._notify(NoticeKind.ERROR, "Save failed")
            return False

        task.merge(record)
        self._rerender()
        self._notify(NoticeKind.SUCCESS, "Task updated")
        return True

    async def delete_task(self, task_id: int) -> bool:
        if self.state.find(task_id) is None:
            return False
        try:
            await self._api.delete_task(task_id)
        except ApiError as exc:
            logger.info(f"sync.delete_task: task {task_id} kept ({exc.code})")
            self._notify(NoticeKind.ERROR, "Failed to delete task")
            return False

        self.state.tasks = [task for task in self.state.tasks if task.id != task_id]
        self._rerender()
        return True


__all__ = ["TaskSyncClient"]
