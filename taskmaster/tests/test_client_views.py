from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskmaster.client.state import ClientState, ClientTask
from taskmaster.client.views import (
    deadline_breakdown,
    pinned_tasks,
    recent_activity,
    render,
    render_board,
    status_summary,
    time_ago,
)
from taskmaster.domain.tasks import DeadlineState, TaskStatus

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


def _counts(backlog: int, progress: int, review: int, done: int) -> dict[TaskStatus, int]:
    return {
        TaskStatus.BACKLOG: backlog,
        TaskStatus.IN_PROGRESS: progress,
        TaskStatus.REVIEW: review,
        TaskStatus.DONE: done,
    }


@pytest.mark.parametrize(
    "counts",
    [(1, 1, 1, 0), (1, 1, 1, 1), (2, 1, 0, 0), (1, 0, 0, 0), (3, 3, 3, 1), (1, 1, 1, 3), (7, 5, 0, 1), (3, 3, 2, 0)],
)
def test_summary_always_sums_to_100(counts: tuple[int, int, int, int]) -> None:
    summary = status_summary(_counts(*counts))

    assert summary.total == 100
    assert min(summary.backlog, summary.in_progress, summary.review, summary.done) >= 0


def test_summary_empty_board_is_all_done() -> None:
    summary = status_summary(_counts(0, 0, 0, 0))

    assert (summary.backlog, summary.in_progress, summary.review, summary.done) == (0, 0, 0, 100)


def test_summary_residual_goes_to_done() -> None:
    summary = status_summary(_counts(1, 1, 1, 0))

    assert (summary.backlog, summary.in_progress, summary.review, summary.done) == (33, 33, 33, 1)


def test_board_places_each_task_in_its_column() -> None:
    tasks = [
        ClientTask(id=1, title="a", status=TaskStatus.DONE),
        ClientTask(id=2, title="b"),
        ClientTask(id=3, title="c", status=TaskStatus.DONE),
    ]

    board = render_board(tasks)

    assert board.columns[TaskStatus.DONE] == (1, 3)
    assert board.counts == _counts(1, 0, 0, 2)


def test_pinned_keeps_list_order_and_caps_at_six() -> None:
    tasks = [ClientTask(id=i, title=str(i), starred=i % 2 == 0) for i in range(20)]

    assert pinned_tasks(tasks) == (0, 2, 4, 6, 8, 10)


def test_recent_activity_is_newest_first() -> None:
    tasks = [
        ClientTask(id=i, title=f"t{i}", created_at=NOW - timedelta(minutes=10 * i), assignee="Dev" if i else "")
        for i in range(7)
    ]

    activity = recent_activity(list(reversed(tasks)), NOW)

    assert [item.task_id for item in activity] == [0, 1, 2, 3, 4]
    assert activity[0].assignee == "Unassigned"
    assert activity[0].when == "just now"
    assert activity[1].when == "10m ago"


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=30), "just now"),
        (timedelta(minutes=59), "59m ago"),
        (timedelta(hours=3), "3h ago"),
        (timedelta(days=2, hours=5), "2d ago"),
        (-timedelta(minutes=5), "just now"),
    ],
)
def test_time_ago(delta: timedelta, expected: str) -> None:
    assert time_ago(NOW - delta, NOW) == expected


def test_deadline_breakdown_never_flags_done_work_overdue() -> None:
    tasks = [
        ClientTask(id=1, title="late", deadline=NOW - timedelta(hours=1)),
        ClientTask(id=2, title="late but done", deadline=NOW - timedelta(hours=1), status=TaskStatus.DONE),
        ClientTask(id=3, title="soon", deadline=NOW + timedelta(hours=5)),
        ClientTask(id=4, title="later", deadline=NOW + timedelta(days=5)),
        ClientTask(id=5, title="no deadline"),
    ]

    breakdown = deadline_breakdown(tasks, NOW)

    assert (breakdown.overdue, breakdown.due_soon, breakdown.upcoming) == (1, 2, 1)
    assert [item.task_id for item in breakdown.items][-1] == 4
    assert breakdown.items[0].state is DeadlineState.OVERDUE


def test_render_combines_all_views() -> None:
    state = ClientState(tasks=[ClientTask(id=1, title="a", starred=True, created_at=NOW)])

    views = render(state, NOW)

    assert views.board.counts[TaskStatus.BACKLOG] == 1
    assert views.summary.backlog == 100
    assert views.pinned == (1,)
    assert [item.task_id for item in views.activity] == [1]


def test_summary_borrows_from_largest_when_done_would_go_negative() -> None:
    summary = status_summary(_counts(3, 3, 2, 0))

    assert summary.done == 0
    assert (summary.backlog, summary.in_progress, summary.review) == (37, 38, 25)


def test_render_badges_only_cards_with_deadlines() -> None:
    state = ClientState(
        tasks=[
            ClientTask(id=1, title="late", deadline=NOW - timedelta(minutes=5)),
            ClientTask(id=2, title="soon", deadline=NOW + timedelta(hours=2)),
            ClientTask(id=3, title="open"),
        ]
    )

    views = render(state, NOW)

    assert views.badges == {1: DeadlineState.OVERDUE, 2: DeadlineState.DUE_SOON}
