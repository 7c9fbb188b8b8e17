"""Identity services: labels that group habits and tasks."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from rhythm.domains.habits.models.habit_models import Habit
from rhythm.domains.identities.models.identity_models import Identity
from rhythm.domains.tasks.models.task_models import Task
from rhythm.extensions import db

logger = logging.getLogger(__name__)


def list_identities(user_id: int) -> List[Tuple[Identity, List[Habit]]]:
    """Active identities, each paired with its active habits."""
    identities = (
        Identity.query.filter_by(user_id=user_id, is_active=True)
        .order_by(Identity.created_at.asc(), Identity.id.asc())
        .all()
    )
    habits: Dict[int, List[Habit]] = defaultdict(list)
    ids = [identity.id for identity in identities]
    if ids:
        for habit in (
            Habit.query.filter(
                Habit.user_id == user_id,
                Habit.is_active.is_(True),
                Habit.identity_id.in_(ids),
            )
            .order_by(Habit.sort_order.asc())
            .all()
        ):
            habits[habit.identity_id].append(habit)
    return [(identity, habits.get(identity.id, [])) for identity in identities]


def get_identity(user_id: int, identity_id: int) -> Optional[Identity]:
    return Identity.query.filter_by(id=identity_id, user_id=user_id, is_active=True).first()


def create_identity(user_id: int, *, name: str, emoji: str | None = None) -> Identity:
    name_norm = (name or "").strip()
    if not name_norm:
        raise ValueError("validation_error")
    identity = Identity(user_id=user_id, name=name_norm, emoji=(emoji or "").strip() or "🎯")
    db.session.add(identity)
    db.session.commit()
    return identity


def update_identity(user_id: int, identity_id: int, **fields) -> Optional[Identity]:
    identity = get_identity(user_id, identity_id)
    if not identity:
        return None
    if "name" in fields and not (fields["name"] or "").strip():
        raise ValueError("validation_error")
    if fields.get("name"):
        identity.name = fields["name"].strip()
    if fields.get("emoji"):
        identity.emoji = fields["emoji"].strip()
    db.session.commit()
    return identity


def delete_identity(user_id: int, identity_id: int) -> bool:
    """Soft delete; linked habits and tasks are unlinked in the same transaction."""
    identity = get_identity(user_id, identity_id)
    if not identity:
        return False
    try:
        Habit.query.filter_by(user_id=user_id, identity_id=identity.id).update({Habit.identity_id: None})
        Task.query.filter_by(user_id=user_id, identity_id=identity.id).update({Task.identity_id: None})
        identity.is_active = False
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info("Identity %s deleted for user %s; habits and tasks unlinked", identity_id, user_id)
    return True


__all__ = ["list_identities", "get_identity", "create_identity", "update_identity", "delete_identity"]
