"""Task services: one-off to-dos with an optional identity link."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy import func, or_

from rhythm.core.utils.clock import day_start, utcnow
from rhythm.domains.focus.models.focus_models import PomodoroSession
from rhythm.domains.identities.models.identity_models import Identity
from rhythm.domains.tasks.models.task_models import Task
from rhythm.extensions import db

logger = logging.getLogger(__name__)


def _check_identity(user_id: int, identity_id: Optional[int]) -> None:
    if identity_id is None:
        return
    if not Identity.query.filter_by(id=identity_id, user_id=user_id, is_active=True).first():
        raise ValueError("identity_not_found")


def _set_completed(task: Task, completed: bool, at: datetime | None) -> None:
    task.completed = completed
    task.completed_at = (at or utcnow()) if completed else None


def list_tasks(user_id: int, day: date) -> List[Task]:
    """Open tasks plus the ones completed on ``day``; open first, then by sort order."""
    start = day_start(day)
    end = start + timedelta(days=1)
    return (
        Task.query.filter(
            Task.user_id == user_id,
            or_(
                Task.completed.is_(False),
                (Task.completed_at >= start) & (Task.completed_at < end),
            ),
        )
        .order_by(Task.completed.asc(), Task.sort_order.asc(), Task.id.asc())
        .all()
    )


def get_task(user_id: int, task_id: int) -> Optional[Task]:
    return Task.query.filter_by(id=task_id, user_id=user_id).first()


def create_task(
    user_id: int,
    *,
    name: str,
    emoji: str | None = None,
    identity_id: int | None = None,
    due_date: date | None = None,
) -> Task:
    name_norm = (name or "").strip()
    if not name_norm:
        raise ValueError("validation_error")
    _check_identity(user_id, identity_id)
    max_order = db.session.query(func.max(Task.sort_order)).filter(Task.user_id == user_id).scalar()
    task = Task(
        user_id=user_id,
        name=name_norm,
        emoji=(emoji or "").strip() or "⚡",
        identity_id=identity_id,
        due_date=due_date,
        sort_order=(max_order if max_order is not None else -1) + 1,
    )
    db.session.add(task)
    db.session.commit()
    return task


def update_task(user_id: int, task_id: int, *, at: datetime | None = None, **fields) -> Optional[Task]:
    task = get_task(user_id, task_id)
    if not task:
        return None
    if "name" in fields and not (fields["name"] or "").strip():
        raise ValueError("validation_error")
    if "identity_id" in fields:
        _check_identity(user_id, fields["identity_id"])

    if fields.get("name"):
        task.name = fields["name"].strip()
    if fields.get("emoji"):
        task.emoji = fields["emoji"].strip()
    if "identity_id" in fields:
        task.identity_id = fields["identity_id"]
    if fields.get("sort_order") is not None:
        task.sort_order = fields["sort_order"]
    if "due_date" in fields:
        task.due_date = fields["due_date"]
    if fields.get("completed") is not None and fields["completed"] != task.completed:
        _set_completed(task, fields["completed"], at)
    db.session.commit()
    return task


def toggle_task(user_id: int, task_id: int, *, at: datetime | None = None) -> Optional[Task]:
    task = get_task(user_id, task_id)
    if not task:
        return None
    _set_completed(task, not task.completed, at)
    db.session.commit()
    return task


def delete_task(user_id: int, task_id: int) -> bool:
    """Hard delete; focus sessions keep their label but lose the link."""
    task = get_task(user_id, task_id)
    if not task:
        return False
    PomodoroSession.query.filter_by(user_id=user_id, task_id=task.id).update({PomodoroSession.task_id: None})
    db.session.delete(task)
    db.session.commit()
    logger.info("Task %s deleted for user %s", task_id, user_id)
    return True


__all__ = ["list_tasks", "get_task", "create_task", "update_task", "toggle_task", "delete_task"]
