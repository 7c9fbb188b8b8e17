"""Recurrence rules for habits: due days, streaks and expected occurrences.

Everything here is pure and works on plain ``date`` values, so the same
definitions back the daily view, the weekly score and the stats report.
Weekdays are numbered 0 = Sunday .. 6 = Saturday; weeks are ISO weeks
starting on Monday.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from rhythm.core.utils.clock import day_of_week, iter_days, week_start

DAILY = "DAILY"
WEEKDAYS = "WEEKDAYS"
WEEKENDS = "WEEKENDS"
SPECIFIC_DAYS = "SPECIFIC_DAYS"
X_PER_WEEK = "X_PER_WEEK"

FREQUENCIES = (DAILY, WEEKDAYS, WEEKENDS, SPECIFIC_DAYS, X_PER_WEEK)

# Streak scans never look further back than this many days.
STREAK_SCAN_DAYS = 365


@dataclass(frozen=True)
class RecurrenceRule:
    frequency: str = DAILY
    scheduled_days: frozenset[int] = field(default_factory=frozenset)
    target_per_week: Optional[int] = None

    @classmethod
    def from_habit(cls, habit) -> "RecurrenceRule":
        return cls(
            frequency=habit.frequency or DAILY,
            scheduled_days=frozenset(habit.scheduled_days or ()),
            target_per_week=habit.target_per_week,
        )


def validate_rule(frequency: str, scheduled_days: Iterable[int] | None, target_per_week: int | None) -> None:
    """Reject rules that can never be meaningful; raises ``ValueError("invalid_recurrence")``."""
    if frequency not in FREQUENCIES:
        raise ValueError("invalid_recurrence")
    days = list(scheduled_days or ())
    if any(not 0 <= d <= 6 for d in days):
        raise ValueError("invalid_recurrence")
    if frequency == SPECIFIC_DAYS and not days:
        raise ValueError("invalid_recurrence")
    if frequency == X_PER_WEEK and not (target_per_week and target_per_week > 0):
        raise ValueError("invalid_recurrence")


def is_due(rule: RecurrenceRule, weekday: int, completions_so_far_this_week: int = 0) -> bool:
    """Whether ``weekday`` is a due day under ``rule``.

    For X_PER_WEEK the caller passes how many completions were recorded
    earlier in the same week; the habit stays due until the target is met.
    A missing or zero target is treated as always due.
    """
    frequency = rule.frequency
    if frequency == WEEKDAYS:
        return 1 <= weekday <= 5
    if frequency == WEEKENDS:
        return weekday in (0, 6)
    if frequency == SPECIFIC_DAYS:
        return weekday in rule.scheduled_days
    if frequency == X_PER_WEEK:
        if not rule.target_per_week:
            return True
        return completions_so_far_this_week < rule.target_per_week
    return True


def completions_before_in_week(day: date, completion_dates: Iterable[date]) -> int:
    monday = week_start(day)
    return sum(1 for done in completion_dates if monday <= done < day)


def is_due_on(rule: RecurrenceRule, day: date, completion_dates: Iterable[date] = ()) -> bool:
    """Calendar-date form of :func:`is_due`."""
    earlier = completions_before_in_week(day, completion_dates) if rule.frequency == X_PER_WEEK else 0
    return is_due(rule, day_of_week(day), earlier)


def current_streak(rule: RecurrenceRule, completion_dates: Iterable[date], reference_date: date) -> int:
    """Consecutive completed due days ending at ``reference_date``.

    Days that are not due are skipped; the first due day without a
    completion ends the run, so an open most-recent due day yields 0.
    X_PER_WEEK habits have no day-by-day streak.
    """
    if rule.frequency == X_PER_WEEK:
        return 0
    done = set(completion_dates)
    streak = 0
    day = reference_date
    for _ in range(STREAK_SCAN_DAYS):
        if is_due(rule, day_of_week(day)):
            if day not in done:
                break
            streak += 1
        day -= timedelta(days=1)
    return streak


def weeks_spanned(start: date, end: date) -> int:
    """Number of ISO weeks (calendar partition) touched by ``start..end``."""
    if end < start:
        return 0
    return (week_start(end) - week_start(start)).days // 7 + 1


def expected_occurrences(rule: RecurrenceRule, start: date, end: date) -> int:
    """Due days expected in the inclusive range ``start..end``.

    X_PER_WEEK counts a full weekly target for every week the range touches,
    partial weeks included.
    """
    if end < start:
        return 0
    if rule.frequency == X_PER_WEEK:
        return weeks_spanned(start, end) * (rule.target_per_week or 1)
    return sum(1 for day in iter_days(start, end) if is_due(rule, day_of_week(day)))
