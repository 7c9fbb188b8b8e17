"""DTO mappers for habits."""

from __future__ import annotations

from rhythm.domains.habits.models.habit_models import Habit


def map_identity_ref(identity) -> dict | None:
    if identity is None:
        return None
    return {"id": identity.id, "name": identity.name, "emoji": identity.emoji}


def map_habit(habit: Habit) -> dict:
    return {
        "id": habit.id,
        "name": habit.name,
        "emoji": habit.emoji,
        "identity_id": habit.identity_id,
        "identity": map_identity_ref(habit.identity),
        "sort_order": habit.sort_order,
        "frequency": habit.frequency,
        "scheduled_days": list(habit.scheduled_days or []),
        "target_per_week": habit.target_per_week,
        "full_description": habit.full_description,
        "recovery_description": habit.recovery_description,
        "minimal_description": habit.minimal_description,
        "is_active": habit.is_active,
        "created_at": habit.created_at.isoformat() if habit.created_at else None,
        "updated_at": habit.updated_at.isoformat() if habit.updated_at else None,
    }


def map_today_item(item: dict) -> dict:
    data = map_habit(item["habit"])
    data.update({key: value for key, value in item.items() if key != "habit"})
    return data


def map_today(view: dict) -> dict:
    return {
        "date": view["date"].isoformat(),
        "energy_mode": view["energy_mode"],
        "habits": [map_today_item(item) for item in view["habits"]],
    }
