import os
import sys
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config as AlembicConfig

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rhythm import create_app
from rhythm.core.users.services import create_user
from rhythm.extensions import db

MIGRATIONS = ROOT / "rhythm" / "migrations"
PASSWORD = "secret-password"


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


def _alembic_config() -> AlembicConfig:
    cfg = AlembicConfig(str(MIGRATIONS / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS))
    cfg.set_main_option("rhythm_env", "testing")
    return cfg


@pytest.fixture(scope="session")
def migrated_db():
    """Apply migrations once per session to mirror production schema."""
    test_db = ROOT / "instance" / "test.db"
    if not os.environ.get("TEST_DATABASE_URL") and test_db.exists():
        test_db.unlink()
    cfg = _alembic_config()
    command.upgrade(cfg, "head")
    yield
    command.downgrade(cfg, "base")


@pytest.fixture()
def app(migrated_db):
    """Per-test app; every table is emptied afterwards.

    No app context stays pushed, so each test-client request gets its own
    context (and its own session and login state) like in production.
    """
    app = create_app("testing")
    yield app
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user(app):
    with app.app_context():
        return create_user("tester@example.com", PASSWORD, full_name="Test User")


@pytest.fixture()
def other_user(app):
    with app.app_context():
        return create_user("someone-else@example.com", PASSWORD)


@pytest.fixture()
def login():
    """Log a test client in; returns the login response."""

    def _login(client, email: str, password: str = PASSWORD):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login


@pytest.fixture()
def auth_client(client, user, login):
    """Test client with a logged-in session for ``user``."""
    login(client, user.email)
    return client


@pytest.fixture()
def as_of(app):
    """Pin the request "today"; returns a setter taking an ISO date."""

    def _set(day: str) -> None:
        app.config["AS_OF_DATE"] = day

    return _set
