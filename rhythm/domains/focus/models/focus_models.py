"""Pomodoro focus session model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from rhythm.core.utils.clock import utcnow
from rhythm.extensions import db


class PomodoroSession(db.Model):
    __tablename__ = "pomodoro_session"
    __table_args__ = (
        db.Index("ix_pomodoro_session_user_completed_at", "user_id", "completed_at"),
        db.Index("ix_pomodoro_session_user_mode", "user_id", "mode"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    mode: Mapped[str] = mapped_column(db.String(16), nullable=False)
    # Minutes
    duration: Mapped[int] = mapped_column(nullable=False)
    completed_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    habit_id: Mapped[int | None] = mapped_column(db.ForeignKey("habit.id", ondelete="SET NULL"))
    task_id: Mapped[int | None] = mapped_column(db.ForeignKey("task.id", ondelete="SET NULL"))
    task_name: Mapped[str | None] = mapped_column(db.String(255))


__all__ = ["PomodoroSession"]
