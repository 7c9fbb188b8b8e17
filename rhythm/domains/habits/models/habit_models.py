"""Habit and completion models."""

from __future__ import annotations

import datetime as dt
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from rhythm.core.utils.clock import utcnow
from rhythm.extensions import db


class Habit(db.Model):
    __tablename__ = "habit"
    __table_args__ = (
        db.Index("ix_habit_user_active_order", "user_id", "is_active", "sort_order"),
        db.Index("ix_habit_identity", "identity_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    identity_id: Mapped[int | None] = mapped_column(db.ForeignKey("identity.id", ondelete="SET NULL"))
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    emoji: Mapped[str] = mapped_column(db.String(16), nullable=False, default="✅")
    sort_order: Mapped[int] = mapped_column(nullable=False, default=0)

    # Recurrence rule (see rhythm.domains.habits.schedule)
    frequency: Mapped[str] = mapped_column(db.String(32), nullable=False, default="DAILY")
    scheduled_days: Mapped[list] = mapped_column(db.JSON, nullable=False, default=list)
    target_per_week: Mapped[int | None] = mapped_column(nullable=True)

    # Description variants per energy mode
    full_description: Mapped[str | None] = mapped_column(db.Text)
    recovery_description: Mapped[str | None] = mapped_column(db.Text)
    minimal_description: Mapped[str | None] = mapped_column(db.Text)

    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    identity = relationship("Identity", lazy="joined")
    completions: Mapped[list["Completion"]] = relationship(
        "Completion",
        back_populates="habit",
        cascade="all, delete-orphan",
    )

    def description_for(self, mode: str) -> str | None:
        variants = {
            "FULL": self.full_description,
            "RECOVERY": self.recovery_description,
            "MINIMAL": self.minimal_description,
        }
        return variants.get(mode) or self.full_description


class Completion(db.Model):
    __tablename__ = "habit_completion"
    __table_args__ = (
        db.UniqueConstraint("habit_id", "date", name="uq_habit_completion_habit_date"),
        db.Index("ix_habit_completion_user_date", "user_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    habit_id: Mapped[int] = mapped_column(
        db.ForeignKey("habit.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    date: Mapped[dt.date] = mapped_column(db.Date, nullable=False)
    # Energy mode active when the habit was completed
    mode: Mapped[str | None] = mapped_column(db.String(16))
    created_at: Mapped[datetime] = mapped_column(default=utcnow)

    habit: Mapped[Habit] = relationship("Habit", back_populates="completions")


__all__ = ["Habit", "Completion"]
