"""Weekly life radar controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.clock import today
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, validation_error
from rhythm.domains.wellbeing.mappers import map_radar
from rhythm.domains.wellbeing.schemas.wellbeing_schemas import RadarUpdate
from rhythm.domains.wellbeing.services import radar_service

radar_api_bp = Blueprint("radar_api", __name__)


@radar_api_bp.get("")
@login_required
def current_week():
    day = today()
    radar = radar_service.get_week(current_user.id, day)
    if radar:
        return jsonify({"ok": True, "radar": map_radar(radar)})
    return jsonify({"ok": True, "radar": map_radar(radar_service.default_week(current_user.id, day), is_new=True)})


@radar_api_bp.post("")
@login_required
@csrf_protected
def save_week():
    try:
        data = RadarUpdate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        radar = radar_service.save_week(current_user.id, today(), **data.model_dump(exclude_unset=True))
    except ValueError as exc:
        return error(str(exc), 400)
    return jsonify({"ok": True, "radar": map_radar(radar)})


@radar_api_bp.get("/history")
@login_required
def history():
    entries = radar_service.history(current_user.id)
    return jsonify({"ok": True, "history": [map_radar(entry) for entry in entries]})
