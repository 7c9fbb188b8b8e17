"""DTO mappers for focus sessions."""

from __future__ import annotations

from rhythm.domains.focus.models.focus_models import PomodoroSession


def map_session(session: PomodoroSession) -> dict:
    return {
        "id": session.id,
        "mode": session.mode,
        "duration": session.duration,
        "completed_at": session.completed_at.isoformat() if session.completed_at else None,
        "habit_id": session.habit_id,
        "task_id": session.task_id,
        "task_name": session.task_name,
    }
