"""Pomodoro services: session log and per-activity focus totals."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from rhythm.core.utils.clock import day_start
from rhythm.domains.focus.models.focus_models import PomodoroSession
from rhythm.domains.habits.models.habit_models import Habit
from rhythm.domains.stats import composer
from rhythm.domains.tasks.models.task_models import Task
from rhythm.extensions import db

logger = logging.getLogger(__name__)

WORK = "work"
RECENT_LIMIT = 100
PERIOD_DAYS = {"day": 0, "week": 7, "month": 30}


def list_sessions(
    user_id: int,
    *,
    day: date | None = None,
    habit_id: int | None = None,
    task_id: int | None = None,
) -> List[PomodoroSession]:
    query = PomodoroSession.query.filter(PomodoroSession.user_id == user_id)
    if day is not None:
        start = day_start(day)
        query = query.filter(
            PomodoroSession.completed_at >= start,
            PomodoroSession.completed_at < start + timedelta(days=1),
        )
    if habit_id is not None:
        query = query.filter(PomodoroSession.habit_id == habit_id)
    if task_id is not None:
        query = query.filter(PomodoroSession.task_id == task_id)
    return query.order_by(PomodoroSession.completed_at.desc(), PomodoroSession.id.desc()).limit(RECENT_LIMIT).all()


def log_session(
    user_id: int,
    *,
    mode: str,
    duration: int,
    habit_id: int | None = None,
    task_id: int | None = None,
    task_name: str | None = None,
    completed_at: datetime | None = None,
) -> PomodoroSession:
    if habit_id is not None and not Habit.query.filter_by(id=habit_id, user_id=user_id).first():
        raise ValueError("not_found")
    if task_id is not None and not Task.query.filter_by(id=task_id, user_id=user_id).first():
        raise ValueError("not_found")
    session = PomodoroSession(
        user_id=user_id,
        mode=mode,
        duration=duration,
        habit_id=habit_id,
        task_id=task_id,
        task_name=(task_name or "").strip() or None,
    )
    if completed_at is not None:
        session.completed_at = completed_at
    db.session.add(session)
    db.session.commit()
    logger.debug("Focus session %s logged for user %s (%s, %s min)", session.id, user_id, mode, duration)
    return session


def work_sessions(user_id: int, start: date, end: date) -> List[PomodoroSession]:
    """Work sessions completed on any day in ``start..end``."""
    return (
        PomodoroSession.query.filter(
            PomodoroSession.user_id == user_id,
            PomodoroSession.mode == WORK,
            PomodoroSession.completed_at >= day_start(start),
            PomodoroSession.completed_at < day_start(end) + timedelta(days=1),
        )
        .order_by(PomodoroSession.completed_at.asc())
        .all()
    )


def activity_lookups(user_id: int, sessions: List[PomodoroSession]) -> tuple[Dict[int, Habit], Dict[int, Task]]:
    """Current habit and task rows referenced by ``sessions``, inactive habits included."""
    habit_ids = {s.habit_id for s in sessions if s.habit_id}
    task_ids = {s.task_id for s in sessions if s.task_id}
    habits = (
        {h.id: h for h in Habit.query.filter(Habit.user_id == user_id, Habit.id.in_(habit_ids)).all()}
        if habit_ids
        else {}
    )
    tasks = (
        {t.id: t for t in Task.query.filter(Task.user_id == user_id, Task.id.in_(task_ids)).all()}
        if task_ids
        else {}
    )
    return habits, tasks


def focus_stats(user_id: int, period: str, as_of: date) -> dict:
    if period not in PERIOD_DAYS:
        raise ValueError("validation_error")
    start = as_of - timedelta(days=PERIOD_DAYS[period])
    sessions = work_sessions(user_id, start, as_of)
    habits, tasks = activity_lookups(user_id, sessions)
    activities = composer.group_activities(sessions, habits, tasks)
    return {
        "period": period,
        "start": start.isoformat(),
        "end": as_of.isoformat(),
        "total_minutes": sum(s.duration for s in sessions),
        "total_sessions": len(sessions),
        "activities": activities,
    }


__all__ = ["list_sessions", "log_session", "work_sessions", "activity_lookups", "focus_stats"]
