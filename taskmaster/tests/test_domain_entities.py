from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from taskmaster.domain.exceptions import InvariantViolation
from taskmaster.domain.tasks import Task, TaskChanges, TaskDraft, TaskPriority, TaskStatus
from taskmaster.domain.users.entities import Session


def test_task_payload_uses_wire_names() -> None:
    created = datetime(2026, 10, 19, 10, 15, tzinfo=UTC)
    task = Task(
        id=3,
        user_id=1,
        title="Ship v2",
        priority=TaskPriority.HIGH,
        status=TaskStatus.IN_PROGRESS,
        assignee="Dev",
        starred=True,
        created_at=created,
        assigned_at=created,
        assigned_at_display="19 Oct 2026, 03:45 pm",
    )

    payload = task.to_payload()

    assert payload["createdAt"] == int(created.timestamp() * 1000)
    assert payload["assignedAt"] == "2026-10-19T10:15:00.000Z"
    assert payload["status"] == "in-progress"
    assert payload["priority"] == "High"
    assert payload["userId"] == 1
    assert payload["deadline"] is None
    assert payload["completedAt"] is None


def test_draft_requires_title() -> None:
    with pytest.raises(InvariantViolation):
        TaskDraft(title="  ")


def test_changes_reject_immutable_keys() -> None:
    with pytest.raises(InvariantViolation):
        TaskChanges({"userId": 2})


def test_changes_detect_move_to_done() -> None:
    assert TaskChanges({"status": "done"}).moves_to_done
    assert not TaskChanges({"status": "review"}).moves_to_done
    assert not TaskChanges()


def test_session_validity_is_strict() -> None:
    now = datetime(2026, 10, 19, tzinfo=UTC)
    session = Session(token="t", user_id=1, created_at=now, expires_at=now + timedelta(days=7))

    assert session.is_valid_at(now)
    assert not session.is_valid_at(now + timedelta(days=7))
