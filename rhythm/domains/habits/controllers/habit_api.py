"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.clock import today
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, parse_query, validation_error
from rhythm.domains.habits import services as habit_services
from rhythm.domains.habits.mappers import map_habit, map_today
from rhythm.domains.habits.schemas.habit_schemas import (
    CompletionToggle,
    HabitCreate,
    HabitUpdate,
    TodayQuery,
)

habit_api_bp = Blueprint("habit_api", __name__)

_NOT_FOUND = ("not_found", "identity_not_found")


def _service_error(exc: ValueError):
    code = str(exc)
    if code in _NOT_FOUND:
        return error("not_found", 404)
    return error(code, 400)


@habit_api_bp.get("")
@login_required
def list_habits():
    habits = habit_services.list_habits(current_user.id)
    return jsonify({"ok": True, "habits": [map_habit(h) for h in habits]})


@habit_api_bp.post("")
@login_required
@csrf_protected
def create_habit():
    try:
        data = HabitCreate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        habit = habit_services.create_habit(current_user.id, **data.model_dump())
    except ValueError as exc:
        return _service_error(exc)
    return jsonify({"ok": True, "habit": map_habit(habit)}), 201


@habit_api_bp.get("/today")
@login_required
def today_view():
    query, exc = parse_query(TodayQuery)
    if exc:
        return validation_error(exc)
    view = habit_services.today_habits(current_user.id, query.date or today())
    return jsonify({"ok": True, **map_today(view)})


@habit_api_bp.get("/score")
@login_required
def weekly_score():
    score = habit_services.weekly_score(current_user.id, today())
    return jsonify({"ok": True, **score})


@habit_api_bp.patch("/<int:habit_id>")
@login_required
@csrf_protected
def update_habit(habit_id: int):
    try:
        data = HabitUpdate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        habit = habit_services.update_habit(current_user.id, habit_id, **data.model_dump(exclude_unset=True))
    except ValueError as exc:
        return _service_error(exc)
    if not habit:
        return error("not_found", 404)
    return jsonify({"ok": True, "habit": map_habit(habit)})


@habit_api_bp.delete("/<int:habit_id>")
@login_required
@csrf_protected
def delete_habit(habit_id: int):
    habit = habit_services.deactivate_habit(current_user.id, habit_id)
    if not habit:
        return error("not_found", 404)
    return jsonify({"ok": True})


@habit_api_bp.post("/<int:habit_id>/complete")
@login_required
@csrf_protected
def toggle_completion(habit_id: int):
    try:
        data = CompletionToggle.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        result = habit_services.toggle_completion(
            current_user.id,
            habit_id,
            day=data.date or today(),
            mode=data.mode,
        )
    except ValueError as exc:
        return _service_error(exc)
    return jsonify({"ok": True, **result})
