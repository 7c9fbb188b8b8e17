"""Authentication service layer."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func

from rhythm.core.auth.password import verify_password
from rhythm.core.auth.schemas import RegisterRequest
from rhythm.core.users.models import User
from rhythm.core.users.services import create_user

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    normalized_email = (email or "").strip().lower()
    user = User.query.filter(func.lower(User.email) == normalized_email).first()
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def register_user(payload: RegisterRequest) -> User:
    normalized_email = payload.email.strip().lower()
    existing = User.query.filter(func.lower(User.email) == normalized_email).first()
    if existing:
        raise ValueError("email_already_exists")
    user = create_user(
        normalized_email,
        payload.password,
        full_name=payload.full_name,
        timezone=payload.timezone or DEFAULT_TIMEZONE,
    )
    logger.info("Registered user %s", user.id)
    return user
