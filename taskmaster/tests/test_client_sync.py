from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime

import httpx
import pytest

from taskmaster.client.api import ApiError, TaskApiClient
from taskmaster.client.state import ClientState, ClientTask, NoticeKind
from taskmaster.client.sync import TaskSyncClient
from taskmaster.domain.tasks import TaskPriority, TaskStatus

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)
NOW_MS = int(NOW.timestamp() * 1000)


class FakeTaskServer:
    """Just enough of the task API to drive the sync client over MockTransport."""

    def __init__(self) -> None:
        self.tasks: dict[int, dict] = {}
        self.requests: list[tuple[str, str, dict | None]] = []
        self.fail_with: int | None = None
        self.offline = False
        self.me_fails = False
        self._seq = 1

    def seed(self, title: str, **fields) -> dict:
        record = {
            "id": self._seq,
            "title": title,
            "priority": "Medium",
            "status": "backlog",
            "assignee": "",
            "starred": False,
            "userId": 1,
            "createdAt": NOW_MS + self._seq,
            "assignedAt": "2026-10-19T12:00:00.000Z",
            "assignedAtDisplay": "19 Oct 2026, 05:30 pm",
            "deadline": None,
            "completedAt": None,
            "completedAtDisplay": None,
        }
        record.update(fields)
        self.tasks[record["id"]] = record
        self._seq += 1
        return record

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body))
        assert request.headers.get("X-Request-ID")
        if self.offline:
            raise httpx.ConnectError("offline", request=request)
        if self.fail_with:
            return httpx.Response(self.fail_with, json={"error": "internal_error"})
        if request.headers.get("Authorization") != "Bearer t0k":
            return httpx.Response(401, json={"error": "unauthorized"})

        path = request.url.path
        if path == "/api/auth/me":
            if self.me_fails:
                return httpx.Response(404, json={"error": "user_not_found"})
            return httpx.Response(200, json={"id": 1, "name": "Ann", "email": "ann@x.io"})
        if path == "/api/tasks" and request.method == "GET":
            return httpx.Response(200, json=sorted(self.tasks.values(), key=lambda t: -t["id"]))
        if path == "/api/tasks" and request.method == "POST":
            return httpx.Response(201, json=self.seed(**body))
        task_id = int(path.rsplit("/", 1)[-1])
        if task_id not in self.tasks:
            return httpx.Response(404, json={"error": "task_not_found"})
        if request.method == "PATCH":
            self.tasks[task_id].update(body)
            if body.get("status") == "done":
                self.tasks[task_id]["completedAt"] = "2026-10-19T12:00:00.000Z"
            return httpx.Response(200, json=self.tasks[task_id])
        del self.tasks[task_id]
        return httpx.Response(200, json={"ok": True})


@pytest.fixture()
def server() -> FakeTaskServer:
    return FakeTaskServer()


def _sync(server: FakeTaskServer, **kwargs) -> TaskSyncClient:
    api = TaskApiClient(
        "http://taskmaster.test", token="t0k", transport=httpx.MockTransport(server.handler)
    )
    return TaskSyncClient(api, clock=lambda: NOW, **kwargs)


def _loaded(server: FakeTaskServer, **kwargs) -> TaskSyncClient:
    sync = _sync(server, **kwargs)
    asyncio.run(sync.load())
    return sync


def test_load_builds_state_and_views(server) -> None:
    server.seed("a", starred=True)
    server.seed("b", status="done")

    sync = _loaded(server)

    assert [t.title for t in sync.state.tasks] == ["b", "a"]
    assert sync.state.views.board.counts[TaskStatus.DONE] == 1
    assert sync.state.views.pinned == (1,)
    assert sync.state.views.summary.total == 100
    assert sync.state.user.name == "Ann"


def test_load_failure_keeps_cached_tasks(server) -> None:
    cached = ClientState(tasks=[ClientTask(id=9, title="cached")])
    server.offline = True

    sync = _sync(server, state=cached)
    asyncio.run(sync.load())

    assert [t.id for t in sync.state.tasks] == [9]
    assert sync.state.user is None


def test_load_keeps_tasks_when_user_lookup_fails(server) -> None:
    server.seed("a")
    server.me_fails = True

    sync = _loaded(server)

    assert [t.title for t in sync.state.tasks] == ["a"]
    assert sync.state.user is None


def test_load_failure_without_cache_is_empty(server) -> None:
    server.fail_with = 500

    sync = _loaded(server)

    assert sync.state.tasks == []
    assert sync.state.views.summary.done == 100


def test_move_renders_optimistically_then_merges_server_record(server) -> None:
    server.seed("Ship v2")
    renders: list[dict] = []
    sync = _loaded(server, on_render=lambda s: renders.append(dict(s.views.board.counts)))
    renders.clear()

    assert asyncio.run(sync.move_task(1, TaskStatus.DONE)) is True

    assert renders[0][TaskStatus.DONE] == 1
    task = sync.state.find(1)
    assert task.status is TaskStatus.DONE
    assert task.completed_at is not None
    assert server.requests[-1] == ("PATCH", "/api/tasks/1", {"status": "done"})


def test_failed_move_rolls_back_counts_and_notifies(server) -> None:
    server.seed("Ship v2")
    renders: list[dict] = []
    sync = _loaded(server, on_render=lambda s: renders.append(dict(s.views.board.counts)))
    before = dict(sync.state.views.board.counts)
    server.fail_with = 500

    assert asyncio.run(sync.move_task(1, TaskStatus.REVIEW)) is False

    assert renders[-2][TaskStatus.REVIEW] == 1
    assert sync.state.views.board.counts == before
    assert sync.state.find(1).status is TaskStatus.BACKLOG
    assert [n.kind for n in sync.state.drain_notices()] == [NoticeKind.ERROR]


def test_move_to_same_column_sends_nothing(server) -> None:
    server.seed("Ship v2")
    sync = _loaded(server)
    sent = len(server.requests)

    assert asyncio.run(sync.move_task(1, TaskStatus.BACKLOG)) is False
    assert len(server.requests) == sent


def test_star_toggle_is_not_rolled_back(server) -> None:
    server.seed("Ship v2")
    sync = _loaded(server)
    server.offline = True

    asyncio.run(sync.toggle_star(1))

    assert sync.state.find(1).starred is True
    assert sync.state.views.pinned == (1,)
    assert sync.state.notices == []


def test_unpin_clears_star(server) -> None:
    server.seed("Ship v2", starred=True)
    sync = _loaded(server)

    assert asyncio.run(sync.unpin(1)) is True
    assert sync.state.views.pinned == ()
    assert server.tasks[1]["starred"] is False


def test_create_appends_only_after_success(server) -> None:
    sync = _loaded(server)

    task = asyncio.run(sync.create_task("Ship v2", priority=TaskPriority.HIGH))

    assert task is not None
    assert task.priority is TaskPriority.HIGH
    assert [t.id for t in sync.state.tasks] == [task.id]

    server.fail_with = 500
    assert asyncio.run(sync.quick_add("second")) is None
    assert len(sync.state.tasks) == 1
    assert sync.state.notices[-1].kind is NoticeKind.ERROR


def test_create_requires_title_without_calling_server(server) -> None:
    sync = _loaded(server)
    sent = len(server.requests)

    assert asyncio.run(sync.quick_add("   ")) is None
    assert len(server.requests) == sent


def test_edit_sends_full_editable_set_and_notifies(server) -> None:
    server.seed("Ship v2")
    sync = _loaded(server)

    ok = asyncio.run(
        sync.edit_task(
            1,
            title="Ship v3",
            priority=TaskPriority.LOW,
            status=TaskStatus.REVIEW,
            assignee="Dev",
        )
    )

    assert ok is True
    assert server.requests[-1][2] == {
        "title": "Ship v3",
        "priority": "Low",
        "status": "review",
        "assignee": "Dev",
    }
    assert sync.state.find(1).title == "Ship v3"
    assert sync.state.notices[-1].message == "Task updated"


def test_failed_edit_leaves_record_untouched(server) -> None:
    server.seed("Ship v2")
    sync = _loaded(server)
    server.fail_with = 500

    ok = asyncio.run(
        sync.edit_task(1, title="Ship v3", priority=TaskPriority.LOW, status=TaskStatus.DONE)
    )

    assert ok is False
    assert sync.state.find(1).title == "Ship v2"
    assert sync.state.notices[-1].message == "Save failed"


def test_delete_removes_after_success_only(server) -> None:
    server.seed("a")
    server.seed("b")
    sync = _loaded(server)

    server.fail_with = 500
    assert asyncio.run(sync.delete_task(1)) is False
    assert len(sync.state.tasks) == 2

    server.fail_with = None
    assert asyncio.run(sync.delete_task(1)) is True
    assert [t.id for t in sync.state.tasks] == [2]


def test_api_client_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/auth/me":
            return httpx.Response(200, json={"id": "not-a-number"})
        return httpx.Response(404, json={"error": "task_not_found"})

    async def scenario() -> list[ApiError]:
        errors = []
        async with TaskApiClient(
            "http://taskmaster.test", token="t", transport=httpx.MockTransport(handler)
        ) as api:
            for call in (api.me(), api.delete_task(3)):
                try:
                    await call
                except ApiError as exc:
                    errors.append(exc)
        return errors

    bad_body, not_found = asyncio.run(scenario())

    assert (bad_body.code, not_found.status, not_found.code) == ("bad_response", 404, "task_not_found")


def test_login_stores_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"token": "abc", "user": {"id": 1, "name": "Ann", "email": "ann@x.io"}}
        )

    api = TaskApiClient("http://taskmaster.test", transport=httpx.MockTransport(handler))
    auth = asyncio.run(api.login("ann@x.io", "pw"))

    assert auth.user.name == "Ann"
    assert api.token == "abc"
