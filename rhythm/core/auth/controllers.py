"""Auth HTTP controllers backed by Flask-Login cookie sessions."""

from __future__ import annotations

from flask import Blueprint, jsonify, session
from flask_login import current_user, login_required, login_user, logout_user
from pydantic import ValidationError

from rhythm.core.auth.auth_service import authenticate_user, register_user
from rhythm.core.auth.csrf import generate_csrf_token
from rhythm.core.auth.schemas import LoginRequest, RegisterRequest
from rhythm.core.users.schemas import serialize_user
from rhythm.core.utils.decorators import csrf_protected
from rhythm.core.utils.validation import error, json_body, validation_error
from rhythm.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    try:
        data = RegisterRequest.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    try:
        user = register_user(data)
    except ValueError as exc:
        return error(str(exc), 400)

    session.clear()
    login_user(user, remember=True)
    return (
        jsonify(
            {
                "ok": True,
                "user": serialize_user(user).model_dump(),
                "csrf_token": generate_csrf_token(),
            }
        ),
        201,
    )


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    # Never carry a stale session (and its CSRF token) across a login.
    session.clear()
    try:
        data = LoginRequest.model_validate(json_body())
    except ValidationError as exc:
        return validation_error(exc)
    user = authenticate_user(data.email, data.password)
    if not user:
        return error("invalid_credentials", 401)
    login_user(user, remember=data.remember)
    return jsonify(
        {
            "ok": True,
            "csrf_token": generate_csrf_token(),
            "user": serialize_user(user).model_dump(),
        }
    )


@auth_bp.post("/logout")
@login_required
@csrf_protected
def logout():
    session.clear()
    # Must follow clear(): logout_user marks the remember-me cookie for removal
    logout_user()
    return jsonify({"ok": True})


@auth_bp.get("/me")
@login_required
def me():
    return jsonify(
        {
            "ok": True,
            "user": serialize_user(current_user._get_current_object()).model_dump(),
            "csrf_token": generate_csrf_token(),
        }
    )
