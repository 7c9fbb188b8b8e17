"""Tasks API: list, create, update, toggle and delete."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from rhythm.domains.focus.models.focus_models import PomodoroSession
from rhythm.extensions import db


def _task(client, name="File taxes", **fields):
    resp = client.post("/api/tasks", json={"name": name, **fields})
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["task"]


def test_create_task_defaults(auth_client):
    task = _task(auth_client, due_date="2026-11-01")
    assert task["emoji"] == "⚡"
    assert task["completed"] is False
    assert task["completed_at"] is None
    assert task["due_date"] == "2026-11-01"


def test_create_task_missing_name_is_400(auth_client):
    assert auth_client.post("/api/tasks", json={"emoji": "x"}).status_code == 400


def test_toggle_task_stamps_and_clears_completed_at(auth_client):
    task = _task(auth_client)
    body = auth_client.post(f"/api/tasks/{task['id']}/complete").get_json()
    assert body["completed"] is True
    assert body["task"]["completed_at"] is not None

    body = auth_client.post(f"/api/tasks/{task['id']}/complete").get_json()
    assert body["completed"] is False
    assert body["task"]["completed_at"] is None


def test_list_tasks_puts_open_tasks_first(auth_client):
    done = _task(auth_client, name="Done today")
    _task(auth_client, name="Open")
    auth_client.post(f"/api/tasks/{done['id']}/complete")

    names = [t["name"] for t in auth_client.get("/api/tasks").get_json()["tasks"]]
    assert names == ["Open", "Done today"]


def test_update_task_completed_flag(auth_client):
    task = _task(auth_client)
    resp = auth_client.patch(f"/api/tasks/{task['id']}", json={"completed": True, "name": "Renamed"})
    body = resp.get_json()["task"]
    assert body["completed"] is True
    assert body["completed_at"] is not None
    assert body["name"] == "Renamed"


def test_delete_task_unlinks_focus_sessions(app, auth_client):
    task = _task(auth_client)
    session = auth_client.post(
        "/api/pomodoro",
        json={"mode": "work", "duration": 25, "task_id": task["id"], "task_name": "File taxes"},
    ).get_json()["session"]

    assert auth_client.delete(f"/api/tasks/{task['id']}").status_code == 200
    assert auth_client.get("/api/tasks").get_json()["tasks"] == []
    with app.app_context():
        kept = db.session.get(PomodoroSession, session["id"])
        assert kept.task_id is None
        assert kept.task_name == "File taxes"


def test_task_of_other_user_is_404(client, user, other_user, login):
    login(client, other_user.email)
    task = _task(client)
    client.post("/api/auth/logout")

    login(client, user.email)
    assert client.patch(f"/api/tasks/{task['id']}", json={"name": "x"}).status_code == 404
    assert client.post(f"/api/tasks/{task['id']}/complete").status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_task_completed_on_pinned_day_stays_listed(auth_client, as_of):
    as_of("2026-03-04")
    task = _task(auth_client)
    body = auth_client.post(f"/api/tasks/{task['id']}/complete").get_json()
    assert body["task"]["completed_at"].startswith("2026-03-04")

    tasks = auth_client.get("/api/tasks").get_json()["tasks"]
    assert [(t["id"], t["completed"]) for t in tasks] == [(task["id"], True)]
