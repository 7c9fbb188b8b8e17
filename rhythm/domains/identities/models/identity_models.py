"""Identity labels that group habits and tasks."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from rhythm.core.utils.clock import utcnow
from rhythm.extensions import db


class Identity(db.Model):
    __tablename__ = "identity"
    __table_args__ = (db.Index("ix_identity_user_active", "user_id", "is_active"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    emoji: Mapped[str] = mapped_column(db.String(16), nullable=False, default="🎯")
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)


__all__ = ["Identity"]
