"""Per-day energy level, weekly life radar and daily reflection models."""

from __future__ import annotations

import datetime as dt
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from rhythm.core.utils.clock import utcnow
from rhythm.extensions import db


class DailyEnergyLevel(db.Model):
    __tablename__ = "daily_energy_level"
    __table_args__ = (db.UniqueConstraint("user_id", "date", name="uq_daily_energy_level_user_date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(db.Date, nullable=False)
    mode: Mapped[str] = mapped_column(db.String(16), nullable=False, default="FULL")
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)


class LifeRadar(db.Model):
    __tablename__ = "life_radar"
    __table_args__ = (db.UniqueConstraint("user_id", "week_start", name="uq_life_radar_user_week"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    # Monday of the ISO week
    week_start: Mapped[dt.date] = mapped_column(db.Date, nullable=False)
    body: Mapped[str] = mapped_column(db.String(8), nullable=False, default="GREEN")
    mind: Mapped[str] = mapped_column(db.String(8), nullable=False, default="GREEN")
    profession: Mapped[str] = mapped_column(db.String(8), nullable=False, default="GREEN")
    projects: Mapped[str] = mapped_column(db.String(8), nullable=False, default="GREEN")
    environment: Mapped[str] = mapped_column(db.String(8), nullable=False, default="GREEN")
    notes: Mapped[str | None] = mapped_column(db.Text)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)


class ReflectionEntry(db.Model):
    __tablename__ = "reflection_entry"
    __table_args__ = (db.UniqueConstraint("user_id", "date", name="uq_reflection_entry_user_date"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(db.Date, nullable=False)
    question: Mapped[str] = mapped_column(db.String(255), nullable=False)
    answer: Mapped[str] = mapped_column(db.String(300), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)


__all__ = ["DailyEnergyLevel", "LifeRadar", "ReflectionEntry"]
