"""Weekly life radar: five areas rated GREEN / YELLOW / RED."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from rhythm.core.utils.clock import week_start
from rhythm.domains.wellbeing.models.wellbeing_models import LifeRadar
from rhythm.extensions import db

RADAR_AREAS = ("body", "mind", "profession", "projects", "environment")
RADAR_STATUSES = ("GREEN", "YELLOW", "RED")
HISTORY_WEEKS = 12


def get_week(user_id: int, day: date) -> Optional[LifeRadar]:
    return LifeRadar.query.filter_by(user_id=user_id, week_start=week_start(day)).first()


def default_week(user_id: int, day: date) -> LifeRadar:
    """Unsaved radar for the week of ``day`` with every area GREEN."""
    return LifeRadar(
        user_id=user_id,
        week_start=week_start(day),
        notes=None,
        **{area: "GREEN" for area in RADAR_AREAS},
    )


def save_week(user_id: int, day: date, **fields) -> LifeRadar:
    """Upsert the radar for the week of ``day``; unspecified areas keep their value."""
    for area in RADAR_AREAS:
        value = fields.get(area)
        if value is not None and value not in RADAR_STATUSES:
            raise ValueError("invalid_status")

    radar = get_week(user_id, day)
    if not radar:
        radar = default_week(user_id, day)
        db.session.add(radar)
    for area in RADAR_AREAS:
        if fields.get(area) is not None:
            setattr(radar, area, fields[area])
    if "notes" in fields:
        radar.notes = (fields["notes"] or "").strip() or None
    db.session.commit()
    return radar


def history(user_id: int, limit: int = HISTORY_WEEKS) -> List[LifeRadar]:
    return (
        LifeRadar.query.filter_by(user_id=user_id)
        .order_by(LifeRadar.week_start.desc())
        .limit(limit)
        .all()
    )


def list_weeks(user_id: int, start: date, end: date) -> List[LifeRadar]:
    """Radar entries whose week starts inside ``start..end``, newest first."""
    return (
        LifeRadar.query.filter(
            LifeRadar.user_id == user_id,
            LifeRadar.week_start >= start,
            LifeRadar.week_start <= end,
        )
        .order_by(LifeRadar.week_start.desc())
        .all()
    )
