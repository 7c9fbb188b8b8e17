"""User account and per-user settings models."""

from __future__ import annotations

from datetime import date, datetime

from flask_login import UserMixin
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rhythm.core.utils.clock import utcnow
from rhythm.extensions import db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)


class User(db.Model, TimestampMixin, UserMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(db.String(255))
    timezone: Mapped[str | None] = mapped_column(db.String(64))
    is_active: Mapped[bool] = mapped_column(default=True)

    settings: Mapped["UserSettings | None"] = relationship(
        "UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )


class UserSettings(db.Model, TimestampMixin):
    """Rest days and vacation window; both only suppress "due" status."""

    __tablename__ = "user_settings"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), unique=True, nullable=False)
    # Weekday numbers, 0 = Sunday .. 6 = Saturday
    rest_days: Mapped[list] = mapped_column(db.JSON, nullable=False, default=list)
    vacation_mode: Mapped[bool] = mapped_column(default=False)
    vacation_start: Mapped[date | None] = mapped_column(db.Date)
    vacation_end: Mapped[date | None] = mapped_column(db.Date)

    user: Mapped[User] = relationship("User", back_populates="settings")

    def is_rest_day(self, day_of_week: int) -> bool:
        return day_of_week in (self.rest_days or [])

    def is_on_vacation(self, day: date) -> bool:
        if not self.vacation_mode:
            return False
        if self.vacation_start and day < self.vacation_start:
            return False
        if self.vacation_end and day > self.vacation_end:
            return False
        return True
