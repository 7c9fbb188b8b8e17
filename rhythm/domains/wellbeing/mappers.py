"""DTO mappers for energy, radar and reflection."""

from __future__ import annotations

from rhythm.domains.wellbeing.models.wellbeing_models import LifeRadar, ReflectionEntry


def map_radar(radar: LifeRadar, *, is_new: bool = False) -> dict:
    return {
        "id": radar.id,
        "week_start": radar.week_start.isoformat(),
        "body": radar.body,
        "mind": radar.mind,
        "profession": radar.profession,
        "projects": radar.projects,
        "environment": radar.environment,
        "notes": radar.notes,
        "is_new": is_new,
    }


def map_reflection(entry: ReflectionEntry | None) -> dict | None:
    if entry is None:
        return None
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "question": entry.question,
        "answer": entry.answer,
        "updated_at": entry.updated_at.isoformat() if entry.updated_at else None,
    }
