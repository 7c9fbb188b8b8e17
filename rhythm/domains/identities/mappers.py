"""DTO mappers for identities."""

from __future__ import annotations

from typing import Iterable

from rhythm.domains.identities.models.identity_models import Identity


def map_identity(identity: Identity, habits: Iterable = ()) -> dict:
    return {
        "id": identity.id,
        "name": identity.name,
        "emoji": identity.emoji,
        "habits": [{"id": h.id, "name": h.name, "emoji": h.emoji} for h in habits],
        "created_at": identity.created_at.isoformat() if identity.created_at else None,
    }
