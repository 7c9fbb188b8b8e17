"""Auth API: register, login, logout and session identity."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from rhythm.core.users.models import User
from rhythm.extensions import db


def test_register_logs_in(app, client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "New.User@Example.com", "password": "long-enough", "full_name": "New"},
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["user"]["email"] == "new.user@example.com"
    assert body["csrf_token"]

    me = client.get("/api/auth/me").get_json()
    assert me["user"]["email"] == "new.user@example.com"
    with app.app_context():
        stored = User.query.filter_by(email="new.user@example.com").one()
        assert stored.password_hash != "long-enough"


def test_register_duplicate_email(client, user):
    resp = client.post("/api/auth/register", json={"email": user.email, "password": "long-enough"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "email_already_exists"


def test_register_validation(client):
    resp = client.post("/api/auth/register", json={"email": "not-an-email", "password": "short"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_login_wrong_password(client, user):
    resp = client.post("/api/auth/login", json={"email": user.email, "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "invalid_credentials"


def test_login_inactive_user(app, client, user):
    with app.app_context():
        db.session.get(User, user.id).is_active = False
        db.session.commit()
    resp = client.post("/api/auth/login", json={"email": user.email, "password": "secret-password"})
    assert resp.status_code == 401


def test_login_then_logout(client, user, login):
    body = login(client, user.email.upper()).get_json()
    assert body["user"]["id"] == user.id
    assert client.get("/api/auth/me").status_code == 200

    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/habits").status_code == 401


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/tasks"),
        ("get", "/api/identities"),
        ("get", "/api/energy-level"),
        ("get", "/api/radar"),
        ("get", "/api/reflection"),
        ("get", "/api/pomodoro"),
        ("get", "/api/stats"),
        ("get", "/api/settings"),
        ("post", "/api/habits/1/complete"),
    ],
)
def test_domain_endpoints_require_login(client, method, path):
    resp = getattr(client, method)(path)
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthorized"


def test_csrf_enforced_when_enabled(app, auth_client):
    app.config["WTF_CSRF_ENABLED"] = True
    resp = auth_client.post("/api/habits", json={"name": "Read"})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "csrf_failed"

    token = auth_client.get("/api/auth/me").get_json()["csrf_token"]
    resp = auth_client.post("/api/habits", json={"name": "Read"}, headers={"X-CSRF-Token": token})
    assert resp.status_code == 201


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_csrf_rejects_token_from_another_session(app, client, user, other_user, login):
    app.config["WTF_CSRF_ENABLED"] = True
    login(client, other_user.email)
    stale = client.get("/api/auth/me").get_json()["csrf_token"]

    fresh = login(client, user.email).get_json()["csrf_token"]
    assert fresh != stale
    resp = client.post("/api/habits", json={"name": "Read"}, headers={"X-CSRF-Token": stale})
    assert resp.status_code == 403
