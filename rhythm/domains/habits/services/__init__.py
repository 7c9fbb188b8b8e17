"""Habit services: CRUD, the completion toggle, the daily view and the weekly score."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from rhythm.core.users.services import get_settings
from rhythm.core.utils.clock import day_of_week, week_start
from rhythm.domains.habits.models.habit_models import Completion, Habit
from rhythm.domains.habits.schedule import (
    STREAK_SCAN_DAYS,
    RecurrenceRule,
    current_streak,
    is_due_on,
    validate_rule,
)
from rhythm.domains.identities.models.identity_models import Identity
from rhythm.domains.stats import composer
from rhythm.domains.wellbeing.services.energy_service import get_energy_mode
from rhythm.extensions import db

logger = logging.getLogger(__name__)

_DESCRIPTION_FIELDS = ("full_description", "recovery_description", "minimal_description")
_UPDATABLE = (
    "name",
    "emoji",
    "identity_id",
    "sort_order",
    "frequency",
    "scheduled_days",
    "target_per_week",
) + _DESCRIPTION_FIELDS


def _clean(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


def _check_identity(user_id: int, identity_id: Optional[int]) -> None:
    if identity_id is None:
        return
    if not Identity.query.filter_by(id=identity_id, user_id=user_id, is_active=True).first():
        raise ValueError("identity_not_found")


def list_habits(user_id: int) -> List[Habit]:
    return (
        Habit.query.filter_by(user_id=user_id, is_active=True)
        .order_by(Habit.sort_order.asc(), Habit.id.asc())
        .all()
    )


def get_habit(user_id: int, habit_id: int) -> Optional[Habit]:
    return Habit.query.filter_by(id=habit_id, user_id=user_id).first()


def create_habit(
    user_id: int,
    *,
    name: str,
    emoji: str | None = None,
    identity_id: int | None = None,
    frequency: str = "DAILY",
    scheduled_days: Iterable[int] | None = None,
    target_per_week: int | None = None,
    full_description: str | None = None,
    recovery_description: str | None = None,
    minimal_description: str | None = None,
) -> Habit:
    name_norm = (name or "").strip()
    if not name_norm:
        raise ValueError("validation_error")
    days = sorted(set(scheduled_days or []))
    validate_rule(frequency, days, target_per_week)
    _check_identity(user_id, identity_id)

    max_order = (
        db.session.query(func.max(Habit.sort_order))
        .filter(Habit.user_id == user_id, Habit.is_active.is_(True))
        .scalar()
    )
    habit = Habit(
        user_id=user_id,
        name=name_norm,
        emoji=_clean(emoji) or "✅",
        identity_id=identity_id,
        sort_order=(max_order if max_order is not None else -1) + 1,
        frequency=frequency,
        scheduled_days=days,
        target_per_week=target_per_week,
        full_description=_clean(full_description),
        recovery_description=_clean(recovery_description),
        minimal_description=_clean(minimal_description),
    )
    db.session.add(habit)
    db.session.commit()
    logger.info("Habit %s created for user %s (%s)", habit.id, user_id, habit.frequency)
    return habit


def update_habit(user_id: int, habit_id: int, **fields) -> Optional[Habit]:
    """Apply a partial update; only keys present in ``fields`` are touched."""
    habit = get_habit(user_id, habit_id)
    if not habit:
        return None

    if "name" in fields and not (fields["name"] or "").strip():
        raise ValueError("validation_error")
    if "scheduled_days" in fields and fields["scheduled_days"] is not None:
        fields["scheduled_days"] = sorted(set(fields["scheduled_days"]))
    validate_rule(
        fields.get("frequency") or habit.frequency,
        fields["scheduled_days"] if fields.get("scheduled_days") is not None else habit.scheduled_days,
        fields["target_per_week"] if "target_per_week" in fields else habit.target_per_week,
    )
    if "identity_id" in fields:
        _check_identity(user_id, fields["identity_id"])

    for key in _UPDATABLE:
        if key not in fields:
            continue
        val = fields[key]
        if key in ("name", "emoji") + _DESCRIPTION_FIELDS:
            val = _clean(val)
        if val is None and key in ("name", "emoji", "frequency", "scheduled_days", "sort_order"):
            continue
        setattr(habit, key, val)
    db.session.commit()
    return habit


def deactivate_habit(user_id: int, habit_id: int) -> Optional[Habit]:
    habit = get_habit(user_id, habit_id)
    if not habit:
        return None
    habit.is_active = False
    db.session.commit()
    logger.info("Habit %s deactivated for user %s", habit_id, user_id)
    return habit


def toggle_completion(user_id: int, habit_id: int, *, day: date, mode: str | None = None) -> Dict[str, object]:
    """Flip the completion of ``habit_id`` on ``day``.

    Implemented as a compare-and-swap on (habit_id, date): a conditional
    delete, and an insert only when nothing was deleted. An insert that
    loses a race on the unique constraint means the habit is already
    completed.
    """
    habit = get_habit(user_id, habit_id)
    if not habit:
        raise ValueError("not_found")

    removed = Completion.query.filter_by(habit_id=habit.id, date=day).delete()
    if removed:
        db.session.commit()
        logger.debug("Habit %s un-completed on %s", habit_id, day)
        return {"completed": False, "mode": None}

    resolved = mode or get_energy_mode(user_id, day)
    db.session.add(Completion(user_id=user_id, habit_id=habit.id, date=day, mode=resolved))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.info("Habit %s completion on %s already recorded by a concurrent request", habit_id, day)
        existing = Completion.query.filter_by(habit_id=habit.id, date=day).first()
        return {"completed": True, "mode": existing.mode if existing else resolved}
    logger.debug("Habit %s completed on %s (%s)", habit_id, day, resolved)
    return {"completed": True, "mode": resolved}


def completion_dates(
    user_id: int,
    habit_ids: Iterable[int],
    start: date,
    end: date,
) -> Dict[int, List[date]]:
    ids = list(habit_ids)
    by_habit: Dict[int, List[date]] = defaultdict(list)
    if not ids:
        return by_habit
    rows = (
        db.session.query(Completion.habit_id, Completion.date)
        .filter(
            Completion.user_id == user_id,
            Completion.habit_id.in_(ids),
            Completion.date >= start,
            Completion.date <= end,
        )
        .all()
    )
    for habit_id, done in rows:
        by_habit[habit_id].append(done)
    return by_habit


def streaks_for(user_id: int, habits: List[Habit], as_of: date) -> Dict[int, int]:
    history = completion_dates(user_id, [h.id for h in habits], as_of - timedelta(days=STREAK_SCAN_DAYS), as_of)
    return {
        habit.id: current_streak(RecurrenceRule.from_habit(habit), history.get(habit.id, []), as_of)
        for habit in habits
    }


def today_habits(user_id: int, day: date) -> dict:
    """Active habits annotated for ``day``: due state, completion and streak."""
    habits = list_habits(user_id)
    settings = get_settings(user_id, create=False)
    energy_mode = get_energy_mode(user_id, day)
    is_rest_day = bool(settings and settings.is_rest_day(day_of_week(day)))
    is_vacation = bool(settings and settings.is_on_vacation(day))

    history = completion_dates(user_id, [h.id for h in habits], day - timedelta(days=STREAK_SCAN_DAYS), day)
    modes = {
        c.habit_id: c.mode
        for c in Completion.query.filter(
            Completion.user_id == user_id,
            Completion.date == day,
        ).all()
    }
    monday = week_start(day)

    items = []
    for habit in habits:
        rule = RecurrenceRule.from_habit(habit)
        dates = history.get(habit.id, [])
        scheduled = is_due_on(rule, day, dates)
        completed = habit.id in modes
        items.append(
            {
                "habit": habit,
                "is_scheduled": scheduled,
                "is_rest_day": is_rest_day,
                "is_vacation": is_vacation,
                "is_due": scheduled and not is_rest_day and not is_vacation,
                "completed": completed,
                "completion_mode": modes.get(habit.id) if completed else None,
                "streak": current_streak(rule, dates, day),
                "completions_this_week": sum(1 for d in dates if monday <= d <= day),
                "description": habit.description_for(energy_mode),
            }
        )
    return {"date": day, "energy_mode": energy_mode, "habits": items}


def weekly_score(user_id: int, as_of: date) -> dict:
    habits = list_habits(user_id)
    monday = week_start(as_of)
    total_completed = 0
    if habits:
        total_completed = (
            db.session.query(func.count(Completion.id))
            .join(Habit, Habit.id == Completion.habit_id)
            .filter(
                Habit.user_id == user_id,
                Habit.is_active.is_(True),
                Completion.date >= monday,
                Completion.date <= as_of,
            )
            .scalar()
            or 0
        )
    rules = [RecurrenceRule.from_habit(habit) for habit in habits]
    return composer.weekly_score(rules, total_completed, as_of)


__all__ = [
    "list_habits",
    "get_habit",
    "create_habit",
    "update_habit",
    "deactivate_habit",
    "toggle_completion",
    "completion_dates",
    "streaks_for",
    "today_habits",
    "weekly_score",
]
