"""Daily reflection controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.clock import today
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, validation_error
from rhythm.domains.wellbeing.mappers import map_reflection
from rhythm.domains.wellbeing.schemas.wellbeing_schemas import ReflectionAnswer
from rhythm.domains.wellbeing.services import reflection_service

reflection_api_bp = Blueprint("reflection_api", __name__)


@reflection_api_bp.get("")
@login_required
def get_reflection():
    day = today()
    entry = reflection_service.get_entry(current_user.id, day)
    return jsonify(
        {
            "ok": True,
            "date": day.isoformat(),
            "question": reflection_service.question_for(day),
            "entry": map_reflection(entry),
        }
    )


@reflection_api_bp.post("")
@login_required
@csrf_protected
def save_reflection():
    try:
        data = ReflectionAnswer.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        entry = reflection_service.save_entry(current_user.id, today(), data.answer)
    except ValueError as exc:
        return error(str(exc), 400)
    return jsonify({"ok": True, "entry": map_reflection(entry)})
