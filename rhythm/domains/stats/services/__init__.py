"""Stats dashboard: loads the period's rows and hands them to the composer."""

from __future__ import annotations

import logging
from datetime import date

from rhythm.domains.focus import services as focus_services
from rhythm.domains.habits import services as habit_services
from rhythm.domains.habits.schedule import RecurrenceRule
from rhythm.domains.stats import composer
from rhythm.domains.wellbeing.services import energy_service, radar_service

logger = logging.getLogger(__name__)


def _habit_section(user_id: int, period: str, start: date, end: date, prev_start: date, prev_end: date) -> dict:
    habits = habit_services.list_habits(user_id)
    history = habit_services.completion_dates(user_id, [h.id for h in habits], prev_start, end)

    rows = []
    all_current = []
    for habit in habits:
        dates = history.get(habit.id, [])
        current = [d for d in dates if start <= d <= end]
        previous = [d for d in dates if prev_start <= d <= prev_end]
        all_current.extend(current)
        rate = composer.habit_rate(
            RecurrenceRule.from_habit(habit),
            len(current),
            start,
            end,
            prev_completed=len(previous),
            prev_start=prev_start,
            prev_end=prev_end,
        )
        identity = habit.identity.name if habit.identity else None
        rows.append({"id": habit.id, "name": habit.name, "emoji": habit.emoji, "identity": identity, **rate})

    rows.sort(key=lambda row: row["completion_rate"], reverse=True)

    streaks = habit_services.streaks_for(user_id, habits, end)
    leaderboard = composer.streak_leaderboard(
        {"habit_id": h.id, "name": h.name, "emoji": h.emoji, "streak": streaks.get(h.id, 0)} for h in habits
    )
    return {
        "habits": rows,
        **composer.overall_rate(rows),
        "daily_completions": composer.daily_counts(all_current, start, end, period),
        "top_streaks": leaderboard,
    }


def compose_report(user_id: int, period: str, as_of: date) -> dict:
    """Everything the dashboard shows for ``period`` ending at ``as_of``."""
    start, end, prev_start, prev_end = composer.period_bounds(period, as_of)

    energy = energy_service.list_energy_levels(user_id, start, end)
    sessions = focus_services.work_sessions(user_id, start, end)
    habits_by_id, tasks_by_id = focus_services.activity_lookups(user_id, sessions)
    radar_entries = radar_service.list_weeks(user_id, start, end)

    report = {
        "period": period,
        "start": start.isoformat(),
        "end": end.isoformat(),
        **_habit_section(user_id, period, start, end, prev_start, prev_end),
        "energy": {
            "distribution": composer.energy_distribution(energy),
            "by_weekday": composer.energy_by_weekday(energy),
            "days_logged": len(energy),
        },
        "focus": composer.focus_summary(sessions, start, end, period, habits_by_id, tasks_by_id),
        "radar": composer.radar_summary(radar_entries),
    }
    logger.debug("Stats report for user %s (%s, %s..%s)", user_id, period, start, end)
    return report


__all__ = ["compose_report"]
