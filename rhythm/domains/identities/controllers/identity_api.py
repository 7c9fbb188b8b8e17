"""Identities JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify
from flask_login import current_user, login_required
from pydantic import ValidationError

from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, validation_error
from rhythm.domains.identities import services as identity_services
from rhythm.domains.identities.mappers import map_identity
from rhythm.domains.identities.schemas.identity_schemas import IdentityCreate, IdentityUpdate

identity_api_bp = Blueprint("identity_api", __name__)


@identity_api_bp.get("")
@login_required
def list_identities():
    rows = identity_services.list_identities(current_user.id)
    return jsonify({"ok": True, "identities": [map_identity(identity, habits) for identity, habits in rows]})


@identity_api_bp.post("")
@login_required
@csrf_protected
def create_identity():
    try:
        data = IdentityCreate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        identity = identity_services.create_identity(current_user.id, **data.model_dump())
    except ValueError as exc:
        return error(str(exc), 400)
    return jsonify({"ok": True, "identity": map_identity(identity)}), 201


@identity_api_bp.patch("/<int:identity_id>")
@login_required
@csrf_protected
def update_identity(identity_id: int):
    try:
        data = IdentityUpdate.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        identity = identity_services.update_identity(
            current_user.id, identity_id, **data.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        return error(str(exc), 400)
    if not identity:
        return error("not_found", 404)
    return jsonify({"ok": True, "identity": map_identity(identity)})


@identity_api_bp.delete("/<int:identity_id>")
@login_required
@csrf_protected
def delete_identity(identity_id: int):
    if not identity_services.delete_identity(current_user.id, identity_id):
        return error("not_found", 404)
    return jsonify({"ok": True})
