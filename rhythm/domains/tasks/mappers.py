"""DTO mappers for tasks."""

from __future__ import annotations

from rhythm.domains.habits.mappers import map_identity_ref
from rhythm.domains.tasks.models.task_models import Task


def map_task(task: Task) -> dict:
    return {
        "id": task.id,
        "name": task.name,
        "emoji": task.emoji,
        "identity_id": task.identity_id,
        "identity": map_identity_ref(task.identity),
        "sort_order": task.sort_order,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "completed": task.completed,
        "completed_at": task.completed_at.isoformat() if task.completed_at else None,
        "created_at": task.created_at.isoformat() if task.created_at else None,
    }
