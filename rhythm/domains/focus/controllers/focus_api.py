"""Pomodoro JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.clock import now, today
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, parse_query, validation_error
from rhythm.domains.focus import services as focus_services
from rhythm.domains.focus.mappers import map_session
from rhythm.domains.focus.schemas.focus_schemas import FocusStatsQuery, SessionCreate, SessionQuery

focus_api_bp = Blueprint("focus_api", __name__)


@focus_api_bp.get("")
@login_required
def list_sessions():
    query, exc = parse_query(SessionQuery)
    if exc:
        return validation_error(exc)
    sessions = focus_services.list_sessions(
        current_user.id,
        day=query.date,
        habit_id=query.habit_id,
        task_id=query.task_id,
    )
    return jsonify({"ok": True, "sessions": [map_session(s) for s in sessions]})


@focus_api_bp.post("")
@login_required
@csrf_protected
def log_session():
    try:
        data = SessionCreate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        session = focus_services.log_session(current_user.id, completed_at=now(), **data.model_dump())
    except ValueError as exc:
        code = str(exc)
        return error(code, 404 if code == "not_found" else 400)
    return jsonify({"ok": True, "session": map_session(session)}), 201


@focus_api_bp.get("/stats")
@login_required
def focus_stats():
    query, exc = parse_query(FocusStatsQuery)
    if exc:
        return validation_error(exc)
    stats = focus_services.focus_stats(current_user.id, query.period, today())
    return jsonify({"ok": True, **stats})
