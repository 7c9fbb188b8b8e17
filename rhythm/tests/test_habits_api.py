"""Habits API: CRUD, the completion toggle, the daily view and the weekly score."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from rhythm.domains.habits.models.habit_models import Completion, Habit
from rhythm.extensions import db


def _create(client, **fields):
    payload = {"name": "Read", **fields}
    resp = client.post("/api/habits", json=payload)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["habit"]


def _completion_count(app, habit_id: int) -> int:
    with app.app_context():
        return Completion.query.filter_by(habit_id=habit_id).count()


# ==================== Auth ====================


def test_habits_require_login(client):
    resp = client.get("/api/habits")
    assert resp.status_code == 401
    assert resp.get_json() == {"ok": False, "error": "unauthorized"}


# ==================== CRUD ====================


def test_create_habit_defaults(auth_client):
    habit = _create(auth_client)
    assert habit["name"] == "Read"
    assert habit["emoji"] == "✅"
    assert habit["frequency"] == "DAILY"
    assert habit["sort_order"] == 0
    assert habit["identity"] is None


def test_create_habit_assigns_next_sort_order(auth_client):
    first = _create(auth_client, name="One")
    second = _create(auth_client, name="Two")
    assert second["sort_order"] == first["sort_order"] + 1

    body = auth_client.get("/api/habits").get_json()
    assert [h["name"] for h in body["habits"]] == ["One", "Two"]


def test_create_habit_missing_name_is_400(auth_client):
    resp = auth_client.post("/api/habits", json={"emoji": "📚"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_create_habit_malformed_json_is_400(auth_client):
    resp = auth_client.post("/api/habits", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_json"


def test_create_habit_invalid_recurrence(auth_client):
    resp = auth_client.post("/api/habits", json={"name": "Gym", "frequency": "SPECIFIC_DAYS"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_recurrence"

    resp = auth_client.post("/api/habits", json={"name": "Gym", "frequency": "X_PER_WEEK"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "invalid_recurrence"


def test_create_habit_with_foreign_identity_is_404(client, user, other_user, login):
    login(client, other_user.email)
    identity = client.post("/api/identities", json={"name": "Runner"}).get_json()["identity"]
    client.post("/api/auth/logout")

    login(client, user.email)
    resp = client.post("/api/habits", json={"name": "Run", "identity_id": identity["id"]})
    assert resp.status_code == 404


def test_update_habit_partial(auth_client):
    habit = _create(auth_client, full_description="30 pages")
    resp = auth_client.patch(
        f"/api/habits/{habit['id']}",
        json={"frequency": "SPECIFIC_DAYS", "scheduled_days": [5, 1, 1]},
    )
    assert resp.status_code == 200
    updated = resp.get_json()["habit"]
    assert updated["frequency"] == "SPECIFIC_DAYS"
    assert updated["scheduled_days"] == [1, 5]
    assert updated["name"] == "Read"
    assert updated["full_description"] == "30 pages"


def test_update_habit_of_other_user_is_404(client, user, other_user, login):
    login(client, other_user.email)
    habit = _create(client)
    client.post("/api/auth/logout")

    login(client, user.email)
    assert client.patch(f"/api/habits/{habit['id']}", json={"name": "Mine"}).status_code == 404
    assert client.delete(f"/api/habits/{habit['id']}").status_code == 404
    assert client.post(f"/api/habits/{habit['id']}/complete", json={}).status_code == 404


def test_delete_habit_is_soft(app, auth_client):
    habit = _create(auth_client)
    assert auth_client.delete(f"/api/habits/{habit['id']}").status_code == 200
    assert auth_client.get("/api/habits").get_json()["habits"] == []
    with app.app_context():
        assert db.session.get(Habit, habit["id"]).is_active is False


# ==================== Completion toggle ====================


def test_toggle_twice_leaves_no_completion(app, auth_client, as_of):
    as_of("2026-10-14")
    habit = _create(auth_client)

    first = auth_client.post(f"/api/habits/{habit['id']}/complete", json={})
    assert first.get_json() == {"ok": True, "completed": True, "mode": "FULL"}
    assert _completion_count(app, habit["id"]) == 1

    second = auth_client.post(f"/api/habits/{habit['id']}/complete", json={})
    assert second.get_json()["completed"] is False
    assert _completion_count(app, habit["id"]) == 0


def test_toggle_uses_mode_from_body_then_energy_level(auth_client, as_of):
    as_of("2026-10-14")
    habit = _create(auth_client)

    resp = auth_client.post(f"/api/habits/{habit['id']}/complete", json={"mode": "MINIMAL"})
    assert resp.get_json()["mode"] == "MINIMAL"
    auth_client.post(f"/api/habits/{habit['id']}/complete", json={})

    auth_client.post("/api/energy-level", json={"mode": "RECOVERY"})
    resp = auth_client.post(f"/api/habits/{habit['id']}/complete", json={})
    assert resp.get_json()["mode"] == "RECOVERY"


def test_toggle_rejects_unknown_mode(auth_client):
    habit = _create(auth_client)
    resp = auth_client.post(f"/api/habits/{habit['id']}/complete", json={"mode": "TURBO"})
    assert resp.status_code == 400


def test_toggle_accepts_explicit_date_and_timestamp(app, auth_client):
    habit = _create(auth_client)
    auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": "2026-10-01"})
    # Same UTC day expressed as a timestamp un-completes it
    resp = auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": "2026-10-01T23:30:00Z"})
    assert resp.get_json()["completed"] is False
    assert _completion_count(app, habit["id"]) == 0


def test_toggle_restores_streak(auth_client, as_of):
    as_of("2026-10-14")
    habit = _create(auth_client)
    for day in ("2026-10-11", "2026-10-12", "2026-10-13"):
        auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": day})

    def streak():
        view = auth_client.get("/api/habits/today?date=2026-10-13").get_json()
        return view["habits"][0]["streak"]

    before = streak()
    assert before == 3
    auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": "2026-10-13"})
    assert streak() == 0
    auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": "2026-10-13"})
    assert streak() == before


# ==================== Daily view ====================


def test_today_view_annotations(auth_client, as_of):
    as_of("2026-10-17")  # Saturday
    auth_client.post("/api/energy-level", json={"mode": "MINIMAL"})
    weekdays = _create(
        auth_client,
        name="Work out",
        frequency="WEEKDAYS",
        full_description="Full session",
        minimal_description="10 push-ups",
    )
    daily = _create(auth_client, name="Journal", full_description="One page")
    auth_client.post(f"/api/habits/{daily['id']}/complete", json={})

    body = auth_client.get("/api/habits/today").get_json()
    assert body["date"] == "2026-10-17"
    assert body["energy_mode"] == "MINIMAL"
    by_name = {h["name"]: h for h in body["habits"]}

    assert by_name["Work out"]["is_scheduled"] is False
    assert by_name["Work out"]["is_due"] is False
    assert by_name["Work out"]["description"] == "10 push-ups"

    journal = by_name["Journal"]
    assert journal["is_due"] is True
    assert journal["completed"] is True
    assert journal["completion_mode"] == "MINIMAL"
    assert journal["streak"] == 1
    assert journal["completions_this_week"] == 1
    # No minimal variant: falls back to the full description
    assert journal["description"] == "One page"
    assert weekdays["id"] != daily["id"]


def test_today_view_rest_day_and_vacation_suppress_due(auth_client, as_of):
    as_of("2026-10-14")  # Wednesday
    _create(auth_client)
    auth_client.patch("/api/settings", json={"rest_days": [3]})
    item = auth_client.get("/api/habits/today").get_json()["habits"][0]
    assert item["is_scheduled"] is True
    assert item["is_rest_day"] is True
    assert item["is_due"] is False

    auth_client.patch(
        "/api/settings",
        json={"rest_days": [], "vacation_mode": True, "vacation_start": "2026-10-10"},
    )
    item = auth_client.get("/api/habits/today").get_json()["habits"][0]
    assert item["is_vacation"] is True
    assert item["is_due"] is False


def test_today_view_x_per_week_saturates(auth_client, as_of):
    as_of("2026-10-15")  # Thursday
    habit = _create(auth_client, name="Swim", frequency="X_PER_WEEK", target_per_week=2)
    for day in ("2026-10-12", "2026-10-13"):
        auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": day})
    item = auth_client.get("/api/habits/today").get_json()["habits"][0]
    assert item["completions_this_week"] == 2
    assert item["is_due"] is False
    assert item["streak"] == 0


# ==================== Weekly score ====================


def test_weekly_score_example(auth_client, as_of):
    as_of("2026-10-14")  # Wednesday, third day of the ISO week
    habits = [_create(auth_client, name=f"Habit {i}") for i in range(4)]
    completions = [
        (habits[0], "2026-10-12"),
        (habits[0], "2026-10-13"),
        (habits[0], "2026-10-14"),
        (habits[1], "2026-10-12"),
        (habits[1], "2026-10-13"),
        (habits[2], "2026-10-12"),
        (habits[3], "2026-10-14"),
        # Last week's completion does not count
        (habits[3], "2026-10-11"),
    ]
    for habit, day in completions:
        auth_client.post(f"/api/habits/{habit['id']}/complete", json={"date": day})

    body = auth_client.get("/api/habits/score").get_json()
    assert body["weekly_score"] == 58
    assert body["total_possible"] == 12
    assert body["total_completed"] == 7
    assert body["days_elapsed"] == 3


def test_weekly_score_without_habits(auth_client):
    body = auth_client.get("/api/habits/score").get_json()
    assert body["weekly_score"] == 0
    assert body["total_possible"] == 0
