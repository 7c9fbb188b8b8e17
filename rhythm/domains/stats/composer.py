"""Pure aggregation behind the stats dashboard and the weekly score.

Inputs are rows already filtered to the requested window (ORM objects or
anything exposing the same attributes); nothing here touches the database or
keeps state between calls.
"""

from __future__ import annotations

import math
from collections import OrderedDict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from rhythm.core.utils.clock import day_of_week, iter_days, week_start
from rhythm.domains.habits.schedule import RecurrenceRule, expected_occurrences

PERIODS = ("week", "month", "year")
ENERGY_MODES = ("FULL", "RECOVERY", "MINIMAL")
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
RADAR_AREAS = ("body", "mind", "profession", "projects", "environment")
RADAR_SCORES = {"GREEN": 3, "YELLOW": 2, "RED": 1}
TOP_ACTIVITIES = 5
UNTRACKED = "Untracked"
FOCUS_EMOJI = "⏱️"


def percent(part: float, whole: float) -> int:
    """Rounded percentage (half-up); 0 when ``whole`` is 0."""
    if not whole:
        return 0
    return int(math.floor(part * 100 / whole + 0.5))


def period_bounds(period: str, as_of: date) -> Tuple[date, date, date, date]:
    """Current ``(start, end)`` and the comparable previous ``(start, end)``."""
    if period == "week":
        start = week_start(as_of)
        prev_end = start - timedelta(days=1)
        prev_start = prev_end - timedelta(days=6)
    elif period == "month":
        start = as_of.replace(day=1)
        prev_end = start - timedelta(days=1)
        prev_start = prev_end.replace(day=1)
    elif period == "year":
        start = date(as_of.year, 1, 1)
        prev_start = date(as_of.year - 1, 1, 1)
        prev_end = date(as_of.year - 1, 12, 31)
    else:
        raise ValueError("invalid_period")
    return start, as_of, prev_start, prev_end


def date_label(day: date, period: str) -> str:
    if period == "week":
        return WEEKDAY_LABELS[day_of_week(day)]
    if period == "month":
        return str(day.day)
    return day.strftime("%b")


# -- habits ------------------------------------------------------------------


def habit_rate(
    rule: RecurrenceRule,
    completed: int,
    start: date,
    end: date,
    prev_completed: int = 0,
    prev_start: Optional[date] = None,
    prev_end: Optional[date] = None,
) -> dict:
    expected = expected_occurrences(rule, start, end)
    rate = percent(completed, expected)
    prev_rate = 0
    if prev_start is not None and prev_end is not None:
        prev_rate = percent(prev_completed, expected_occurrences(rule, prev_start, prev_end))
    return {
        "completed_days": completed,
        "expected_days": expected,
        "completion_rate": rate,
        "trend": rate - prev_rate,
    }


def overall_rate(habit_rows: Iterable[Mapping]) -> dict:
    rows = list(habit_rows)
    total_completed = sum(row["completed_days"] for row in rows)
    total_expected = sum(row["expected_days"] for row in rows)
    return {
        "overall_rate": percent(total_completed, total_expected),
        "total_completed": total_completed,
        "total_expected": total_expected,
    }


def daily_counts(completion_dates: Iterable[date], start: date, end: date, period: str) -> List[dict]:
    by_date: "OrderedDict[date, int]" = OrderedDict((day, 0) for day in iter_days(start, end))
    for day in completion_dates:
        if day in by_date:
            by_date[day] += 1
    return [
        {"date": day.isoformat(), "count": count, "label": date_label(day, period)}
        for day, count in by_date.items()
    ]


def weekly_score(rules: Sequence[RecurrenceRule], total_completed: int, as_of: date) -> dict:
    """Completions this ISO week against what the rules expect from Monday to ``as_of``."""
    monday = week_start(as_of)
    days_elapsed = (as_of - monday).days + 1
    total_possible = sum(expected_occurrences(rule, monday, as_of) for rule in rules)
    return {
        "weekly_score": min(100, percent(total_completed, total_possible)),
        "total_possible": total_possible,
        "total_completed": total_completed,
        "days_elapsed": days_elapsed,
        "habit_count": len(rules),
    }


# -- energy ------------------------------------------------------------------


def energy_distribution(records: Iterable) -> Dict[str, int]:
    counts = {mode: 0 for mode in ENERGY_MODES}
    for record in records:
        if record.mode in counts:
            counts[record.mode] += 1
    return counts


def energy_by_weekday(records: Iterable) -> Dict[str, Dict[str, int]]:
    buckets = {label: {mode: 0 for mode in ENERGY_MODES} for label in WEEKDAY_LABELS}
    for record in records:
        bucket = buckets[WEEKDAY_LABELS[day_of_week(record.date)]]
        if record.mode in bucket:
            bucket[record.mode] += 1
    return buckets


# -- focus -------------------------------------------------------------------


def focus_by_day(sessions: Iterable, start: date, end: date, period: str) -> List[dict]:
    by_date: "OrderedDict[date, int]" = OrderedDict((day, 0) for day in iter_days(start, end))
    for session in sessions:
        day = session.completed_at.date()
        if day in by_date:
            by_date[day] += session.duration
    return [
        {"date": day.isoformat(), "minutes": minutes, "label": date_label(day, period)}
        for day, minutes in by_date.items()
    ]


def _resolve_activity(session, habits_by_id: Mapping, tasks_by_id: Mapping) -> Tuple[str, dict]:
    if session.habit_id and session.habit_id in habits_by_id:
        habit = habits_by_id[session.habit_id]
        return f"habit:{session.habit_id}", {"name": habit.name, "emoji": habit.emoji, "type": "habit"}
    if session.task_id and session.task_id in tasks_by_id:
        task = tasks_by_id[session.task_id]
        return f"task:{session.task_id}", {"name": task.name, "emoji": task.emoji, "type": "task"}
    label = session.task_name or UNTRACKED
    return f"custom:{label}", {"name": label, "emoji": FOCUS_EMOJI, "type": "custom"}


def group_activities(
    sessions: Iterable,
    habits_by_id: Mapping,
    tasks_by_id: Mapping,
    limit: Optional[int] = None,
) -> List[dict]:
    """Total minutes per habit / task / free-text label, largest first.

    Sessions whose habit or task no longer resolves fall back to their
    stored label, then to "Untracked".
    """
    groups: Dict[str, dict] = {}
    for session in sessions:
        key, info = _resolve_activity(session, habits_by_id, tasks_by_id)
        group = groups.setdefault(key, {"id": key, **info, "total_minutes": 0, "sessions": 0})
        group["total_minutes"] += session.duration
        group["sessions"] += 1
    ranked = sorted(
        (group for group in groups.values() if group["total_minutes"] > 0),
        key=lambda group: group["total_minutes"],
        reverse=True,
    )
    return ranked[:limit] if limit is not None else ranked


def focus_summary(
    sessions: Sequence,
    start: date,
    end: date,
    period: str,
    habits_by_id: Mapping,
    tasks_by_id: Mapping,
) -> dict:
    total_minutes = sum(session.duration for session in sessions)
    days = (end - start).days + 1
    return {
        "total_minutes": total_minutes,
        "total_sessions": len(sessions),
        "avg_minutes_per_day": int(math.floor(total_minutes / max(1, days) + 0.5)),
        "by_day": focus_by_day(sessions, start, end, period),
        "top_activities": group_activities(sessions, habits_by_id, tasks_by_id, limit=TOP_ACTIVITIES),
    }


# -- radar -------------------------------------------------------------------


def radar_summary(entries: Sequence) -> Optional[dict]:
    """Averages per area (GREEN=3, YELLOW=2, RED=1); ``entries`` newest first."""
    if not entries:
        return None
    averages = {}
    for area in RADAR_AREAS:
        total = sum(RADAR_SCORES.get(getattr(entry, area), 0) for entry in entries)
        averages[area] = round(total / len(entries), 2)
    latest = {area: getattr(entries[0], area) for area in RADAR_AREAS}
    return {"weeks_tracked": len(entries), "averages": averages, "latest": latest}


# -- streaks -----------------------------------------------------------------


def streak_leaderboard(streak_rows: Iterable[Mapping], limit: int = TOP_ACTIVITIES) -> List[dict]:
    ranked = sorted(streak_rows, key=lambda row: row["streak"], reverse=True)
    return [dict(row) for row in ranked[:limit]]
