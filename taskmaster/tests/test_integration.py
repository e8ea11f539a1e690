from __future__ import annotations

import pytest

from taskmaster.app import create_app
from taskmaster.infrastructure.db import ENGINE, Base, SessionLocal
from taskmaster.infrastructure.db.models import SessionToken, Task


@pytest.fixture(autouse=True)
def reset_database() -> None:
    Base.metadata.drop_all(bind=ENGINE)
    Base.metadata.create_all(bind=ENGINE)
    yield
    Base.metadata.drop_all(bind=ENGINE)


@pytest.fixture()
def client():
    app = create_app()
    with app.test_client() as client:
        yield client


def _signup(client, email: str, name: str = "Ann") -> dict[str, str]:
    response = client.post(
        "/api/auth/signup", json={"name": name, "email": email, "password": "pw"}
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


def test_ship_v2_scenario(client) -> None:
    headers = _signup(client, "ann@x.io")

    created = client.post(
        "/api/tasks", json={"title": "Ship v2", "priority": "High"}, headers=headers
    )
    assert created.status_code == 201
    task = created.get_json()
    assert task["status"] == "backlog"
    assert task["starred"] is False
    assert task["completedAt"] is None
    assert isinstance(task["createdAt"], int)
    assert task["assignedAtDisplay"]

    moved = client.patch(f"/api/tasks/{task['id']}", json={"status": "done"}, headers=headers)
    assert moved.status_code == 200
    assert moved.get_json()["completedAt"]

    listed = client.get("/api/tasks", headers=headers).get_json()
    assert len(listed) == 1
    assert listed[0]["status"] == "done"
    assert listed[0]["completedAt"] == moved.get_json()["completedAt"]
    assert listed[0]["completedAtDisplay"]


def test_out_of_range_deadline_is_dropped_not_500(client) -> None:
    headers = _signup(client, "ann@x.io")

    created = client.post(
        "/api/tasks", json={"title": "t", "deadline": "0001-01-01T00:00"}, headers=headers
    )
    assert created.status_code == 201
    assert created.get_json()["deadline"] is None

    task_id = created.get_json()["id"]
    patched = client.patch(
        f"/api/tasks/{task_id}",
        json={"title": "t2", "deadline": "0001-01-01T00:00"},
        headers=headers,
    )
    assert patched.status_code == 200
    assert patched.get_json()["title"] == "t2"
    assert patched.get_json()["deadline"] is None


def test_login_me_logout_flow(client) -> None:
    _signup(client, "ann@x.io")

    bad = client.post("/api/auth/login", json={"email": "ann@x.io", "password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json() == {"error": "invalid_credentials"}

    login = client.post("/api/auth/login", json={"email": "ann@x.io", "password": "pw"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.get_json()['token']}"}

    me = client.get("/api/auth/me", headers=headers)
    assert me.get_json() == {"id": 1, "name": "Ann", "email": "ann@x.io"}

    assert client.post("/api/auth/logout", headers=headers).get_json() == {"ok": True}
    assert client.get("/api/auth/me", headers=headers).status_code == 401

    session = SessionLocal()
    try:
        # The signup session is still live; only the logged-out one is gone.
        assert session.query(SessionToken).count() == 1
    finally:
        session.close()


def test_duplicate_signup_conflicts(client) -> None:
    _signup(client, "ann@x.io")

    response = client.post(
        "/api/auth/signup", json={"name": "Ann", "email": "ann@x.io", "password": "other"}
    )
    assert response.status_code == 409


def test_tasks_are_isolated_between_users(client) -> None:
    alice = _signup(client, "alice@x.io", "Alice")
    bob = _signup(client, "bob@x.io", "Bob")
    task_id = client.post("/api/tasks", json={"title": "secret"}, headers=alice).get_json()["id"]

    assert client.get("/api/tasks", headers=bob).get_json() == []
    assert client.patch(f"/api/tasks/{task_id}", json={"title": "x"}, headers=bob).status_code == 404
    assert client.delete(f"/api/tasks/{task_id}", headers=bob).status_code == 404

    session = SessionLocal()
    try:
        row = session.get(Task, task_id)
        assert row is not None
        assert row.title == "secret"
    finally:
        session.close()


def test_patch_ignores_server_owned_fields(client) -> None:
    headers = _signup(client, "ann@x.io")
    task = client.post("/api/tasks", json={"title": "Ship v2"}, headers=headers).get_json()

    response = client.patch(
        f"/api/tasks/{task['id']}",
        json={"starred": True, "createdAt": 0, "userId": 42, "deadline": "2026-10-20T18:00"},
        headers=headers,
    )

    body = response.get_json()
    assert body["starred"] is True
    assert body["createdAt"] == task["createdAt"]
    assert body["userId"] == task["userId"]
    assert body["deadline"] == "2026-10-20T12:30:00.000Z"


def test_delete_then_gone(client) -> None:
    headers = _signup(client, "ann@x.io")
    task_id = client.post("/api/tasks", json={"title": "tmp"}, headers=headers).get_json()["id"]

    assert client.delete(f"/api/tasks/{task_id}", headers=headers).status_code == 200
    assert client.get("/api/tasks", headers=headers).get_json() == []
    assert client.delete(f"/api/tasks/{task_id}", headers=headers).status_code == 404


def test_pages_redirect_without_session(client) -> None:
    for path in ("/", "/tasks.html", "/analytics.html"):
        response = client.get(path)
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/login.html")

    assert client.get("/login.html").status_code == 200
    assert client.get("/signup.html").status_code == 200


def test_gated_pages_have_no_static_side_door(client) -> None:
    for page in ("index.html", "tasks.html", "inbox.html", "analytics.html"):
        assert client.get(f"/static/{page}").status_code == 404


def test_pages_accept_session_cookie(client) -> None:
    # Signup sets the token cookie on the test client.
    _signup(client, "ann@x.io")

    assert client.get("/tasks.html").status_code == 200
    assert client.get("/nope.html").status_code == 404


def test_health_echoes_request_id(client) -> None:
    response = client.get("/api/health", headers={"X-Request-ID": "abc123"})

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "status": "ok", "database": "ok"}
    assert response.headers["X-Request-ID"] == "abc123"
