"""Daily energy level controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.clock import today
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, parse_query, validation_error
from rhythm.domains.wellbeing.schemas.wellbeing_schemas import EnergyQuery, EnergyUpdate
from rhythm.domains.wellbeing.services import energy_service

energy_api_bp = Blueprint("energy_api", __name__)


@energy_api_bp.get("")
@login_required
def get_energy_level():
    query, exc = parse_query(EnergyQuery)
    if exc:
        return validation_error(exc)
    day = query.date or today()
    mode = energy_service.get_energy_mode(current_user.id, day)
    return jsonify({"ok": True, "date": day.isoformat(), "mode": mode})


@energy_api_bp.post("")
@login_required
@csrf_protected
def set_energy_level():
    try:
        data = EnergyUpdate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    day = data.date or today()
    try:
        level = energy_service.set_energy_mode(current_user.id, day, data.mode)
    except ValueError as exc:
        return error(str(exc), 400)
    return jsonify({"ok": True, "date": level.date.isoformat(), "mode": level.mode})
