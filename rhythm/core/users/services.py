"""User and settings service layer."""

from __future__ import annotations

from typing import Optional

from rhythm.core.auth.password import hash_password
from rhythm.core.users.models import User, UserSettings
from rhythm.extensions import db


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def create_user(
    email: str,
    password: str,
    *,
    full_name: str | None = None,
    timezone: str | None = None,
) -> User:
    user = User(
        email=email.strip().lower(),
        full_name=(full_name or "").strip() or None,
        timezone=timezone or "UTC",
        password_hash=hash_password(password),
    )
    db.session.add(user)
    db.session.commit()
    return user


def get_settings(user_id: int, *, create: bool = True) -> Optional[UserSettings]:
    """Return the user's settings row, creating the default one on first access."""
    settings = UserSettings.query.filter_by(user_id=user_id).first()
    if settings or not create:
        return settings
    settings = UserSettings(user_id=user_id, rest_days=[], vacation_mode=False)
    db.session.add(settings)
    db.session.commit()
    return settings


def update_settings(user_id: int, **fields) -> UserSettings:
    rest_days = fields.get("rest_days")
    if rest_days is not None and not all(0 <= day <= 6 for day in rest_days):
        raise ValueError("invalid_rest_days")

    settings = get_settings(user_id)
    start = fields["vacation_start"] if "vacation_start" in fields else settings.vacation_start
    end = fields["vacation_end"] if "vacation_end" in fields else settings.vacation_end
    if start and end and end < start:
        raise ValueError("invalid_vacation_range")

    if "rest_days" in fields:
        settings.rest_days = sorted(set(rest_days or []))
    if fields.get("vacation_mode") is not None:
        settings.vacation_mode = fields["vacation_mode"]
    settings.vacation_start = start
    settings.vacation_end = end
    db.session.commit()
    return settings
