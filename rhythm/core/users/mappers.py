"""DTO mappers for user settings."""

from __future__ import annotations

from rhythm.core.users.models import UserSettings


def map_settings(settings: UserSettings) -> dict:
    return {
        "id": settings.id,
        "rest_days": list(settings.rest_days or []),
        "vacation_mode": settings.vacation_mode,
        "vacation_start": settings.vacation_start.isoformat() if settings.vacation_start else None,
        "vacation_end": settings.vacation_end.isoformat() if settings.vacation_end else None,
        "updated_at": settings.updated_at.isoformat() if settings.updated_at else None,
    }
