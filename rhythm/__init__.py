"""Rhythm application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask

from rhythm.config import config_by_name
from rhythm.extensions import db, init_extensions, login_manager


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Rhythm Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    instance_root.mkdir(parents=True, exist_ok=True)

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI")
    if db_uri and db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    _configure_logging(app)
    init_extensions(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_auth_handlers(app)

    # Register CLI commands
    from rhythm.scripts.manage import register_commands

    register_commands(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    return app


def _configure_logging(app: Flask) -> None:
    level = str(app.config.get("LOG_LEVEL") or "INFO").upper()
    logging.getLogger("rhythm").setLevel(level)
    app.logger.setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from rhythm.core.auth.controllers import auth_bp  # local import to avoid circulars
    from rhythm.core.users.controllers import settings_api_bp
    from rhythm.domains.focus.controllers.focus_api import focus_api_bp
    from rhythm.domains.habits.controllers.habit_api import habit_api_bp
    from rhythm.domains.identities.controllers.identity_api import identity_api_bp
    from rhythm.domains.stats.controllers.stats_api import stats_api_bp
    from rhythm.domains.tasks.controllers.task_api import task_api_bp
    from rhythm.domains.wellbeing.controllers.energy_api import energy_api_bp
    from rhythm.domains.wellbeing.controllers.radar_api import radar_api_bp
    from rhythm.domains.wellbeing.controllers.reflection_api import reflection_api_bp

    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(settings_api_bp, url_prefix="/api/settings")

    app.register_blueprint(habit_api_bp, url_prefix="/api/habits")
    app.register_blueprint(task_api_bp, url_prefix="/api/tasks")
    app.register_blueprint(identity_api_bp, url_prefix="/api/identities")
    app.register_blueprint(energy_api_bp, url_prefix="/api/energy-level")
    app.register_blueprint(radar_api_bp, url_prefix="/api/radar")
    app.register_blueprint(reflection_api_bp, url_prefix="/api/reflection")
    app.register_blueprint(focus_api_bp, url_prefix="/api/pomodoro")
    app.register_blueprint(stats_api_bp, url_prefix="/api/stats")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        db.session.rollback()
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_auth_handlers(app: Flask) -> None:
    """Login manager callbacks: session user loading and the JSON 401."""

    @login_manager.user_loader
    def _load_user(user_id: str):
        from rhythm.core.users.models import User

        return db.session.get(User, int(user_id)) if user_id else None

    @login_manager.unauthorized_handler
    def _unauthorized():
        return {"ok": False, "error": "unauthorized"}, 401
