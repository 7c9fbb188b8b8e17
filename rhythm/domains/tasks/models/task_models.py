"""One-off task model."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from rhythm.core.utils.clock import utcnow
from rhythm.extensions import db


class Task(db.Model):
    __tablename__ = "task"
    __table_args__ = (
        db.Index("ix_task_user_completed_order", "user_id", "completed", "sort_order"),
        db.Index("ix_task_user_due_date", "user_id", "due_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    identity_id: Mapped[int | None] = mapped_column(db.ForeignKey("identity.id", ondelete="SET NULL"))
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    emoji: Mapped[str] = mapped_column(db.String(16), nullable=False, default="⚡")
    sort_order: Mapped[int] = mapped_column(nullable=False, default=0)
    due_date: Mapped[date | None] = mapped_column(db.Date)
    completed: Mapped[bool] = mapped_column(default=False)
    completed_at: Mapped[datetime | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    identity = relationship("Identity", lazy="joined")


__all__ = ["Task"]
