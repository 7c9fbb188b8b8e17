"""Settings controllers (rest days + vacation window)."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.users import services
from rhythm.core.users.mappers import map_settings
from rhythm.core.users.schemas import SettingsUpdate
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, validation_error

settings_api_bp = Blueprint("settings_api", __name__)


@settings_api_bp.get("")
@login_required
def get_settings():
    settings = services.get_settings(current_user.id)
    return jsonify({"ok": True, "settings": map_settings(settings)})


@settings_api_bp.patch("")
@login_required
@csrf_protected
def update_settings():
    try:
        data = SettingsUpdate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        settings = services.update_settings(current_user.id, **data.model_dump(exclude_unset=True))
    except ValueError as exc:
        return error(str(exc), 400)
    return jsonify({"ok": True, "settings": map_settings(settings)})
