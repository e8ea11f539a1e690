# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Derived views.

Every function here is pure: it reads the task list (plus the current time
where relevant) and returns fresh values. Nothing is cached between renders, so
the board, the widgets and the counts can never disagree with ``state.tasks``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime, timedelta

from taskmaster.domain.tasks import BOARD_COLUMNS, DeadlineState, TaskStatus, classify_deadline

from .state import (
    ActivityItem,
    BoardView,
    ClientState,
    ClientTask,
    DeadlineBreakdown,
    DeadlineItem,
    StatusSummary,
    Views,
)

PINNED_LIMIT = 6
ACTIVITY_LIMIT = 5
DUE_SOON_WINDOW = timedelta(hours=48)


def render_board(tasks: Sequence[ClientTask]) -> BoardView:
    columns: dict[TaskStatus, list[int]] = {status: [] for status in BOARD_COLUMNS}
    for task in tasks:
        columns.get(task.status, columns[TaskStatus.BACKLOG]).append(task.id)
    return BoardView(columns={status: tuple(ids) for status, ids in columns.items()})


def _round_half_up(value: float) -> int:
    return max(0, math.floor(value + 0.5))


def status_summary(counts: dict[TaskStatus, int]) -> StatusSummary:
    total = sum(counts.get(status, 0) for status in BOARD_COLUMNS)
    if total == 0:
        return StatusSummary()

    shares = {
        status: _round_half_up(counts.get(status, 0) * 100 / total) for status in BOARD_COLUMNS
    }
    shares[TaskStatus.DONE] += 100 - sum(shares.values())
    # Residual lands on done; if that would go negative, take it from the largest others.
    while shares[TaskStatus.DONE] < 0:
        largest = max(
            (status for status in BOARD_COLUMNS if status is not TaskStatus.DONE),
            key=lambda status: shares[status],
        )
        shares[largest] -= 1
        shares[TaskStatus.DONE] += 1

    return StatusSummary(
        backlog=shares[TaskStatus.BACKLOG],
        in_progress=shares[TaskStatus.IN_PROGRESS],
        review=shares[TaskStatus.REVIEW],
        done=shares[TaskStatus.DONE],
    )


def pinned_tasks(tasks: Sequence[ClientTask], limit: int = PINNED_LIMIT) -> tuple[int, ...]:
    return tuple(task.id for task in tasks if task.starred)[:limit]


def time_ago(moment: datetime | None, now: datetime) -> str:
    if moment is None:
        return "just now"
    minutes = max(0, int((now - moment).total_seconds())) // 60
    hours, days = minutes // 60, minutes // (60 * 24)
    if days > 0:
        return f"{days}d ago"
    if hours > 0:
        return f"{hours}h ago"
    if minutes > 0:
        return f"{minutes}m ago"
    return "just now"


def recent_activity(
    tasks: Sequence[ClientTask], now: datetime, limit: int = ACTIVITY_LIMIT
) -> tuple[ActivityItem, ...]:
    newest = sorted(
        tasks,
        key=lambda task: task.created_at.timestamp() if task.created_at else 0.0,
        reverse=True,
    )
    return tuple(
        ActivityItem(
            task_id=task.id,
            title=task.title,
            when=time_ago(task.created_at, now),
            assignee=task.assignee or "Unassigned",
        )
        for task in newest[:limit]
    )


def deadline_badge(
    task: ClientTask, now: datetime, *, due_soon: timedelta = DUE_SOON_WINDOW
) -> DeadlineState | None:
    if task.deadline is None:
        return None
    return classify_deadline(task.deadline, now, due_soon=due_soon)


def deadline_breakdown(
    tasks: Sequence[ClientTask], now: datetime, *, due_soon: timedelta = DUE_SOON_WINDOW
) -> DeadlineBreakdown:
    items = []
    for task in sorted((t for t in tasks if t.deadline), key=lambda t: t.deadline):
        state = classify_deadline(task.deadline, now, due_soon=due_soon)
        # Finished work is never reported as overdue.
        if state is DeadlineState.OVERDUE and task.status is TaskStatus.DONE:
            state = DeadlineState.DUE_SOON
        items.append(DeadlineItem(task.id, task.title, task.deadline, state))
    return DeadlineBreakdown(
        items=tuple(items),
        overdue=sum(1 for item in items if item.state is DeadlineState.OVERDUE),
        due_soon=sum(1 for item in items if item.state is DeadlineState.DUE_SOON),
        upcoming=sum(1 for item in items if item.state is DeadlineState.UPCOMING),
    )


def render(state: ClientState, now: datetime, *, due_soon: timedelta = DUE_SOON_WINDOW) -> Views:
    board = render_board(state.tasks)
    return Views(
        board=board,
        summary=status_summary(board.counts),
        pinned=pinned_tasks(state.tasks),
        activity=recent_activity(state.tasks, now),
        deadlines=deadline_breakdown(state.tasks, now, due_soon=due_soon),
        badges={
            task.id: deadline_badge(task, now, due_soon=due_soon)
            for task in state.tasks
            if task.deadline is not None
        },
    )


__all__ = [
    "deadline_badge",
    "deadline_breakdown",
    "pinned_tasks",
    "recent_activity",
    "render",
    "render_board",
    "status_summary",
    "time_ago",
]
