"""Daily energy level: one mode per user per day."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from rhythm.domains.wellbeing.models.wellbeing_models import DailyEnergyLevel
from rhythm.extensions import db

logger = logging.getLogger(__name__)

ENERGY_MODES = ("FULL", "RECOVERY", "MINIMAL")
DEFAULT_MODE = "FULL"


def get_energy_level(user_id: int, day: date) -> Optional[DailyEnergyLevel]:
    return DailyEnergyLevel.query.filter_by(user_id=user_id, date=day).first()


def get_energy_mode(user_id: int, day: date) -> str:
    level = get_energy_level(user_id, day)
    return level.mode if level else DEFAULT_MODE


def set_energy_mode(user_id: int, day: date, mode: str) -> DailyEnergyLevel:
    if mode not in ENERGY_MODES:
        raise ValueError("invalid_mode")
    level = get_energy_level(user_id, day)
    if level:
        level.mode = mode
    else:
        level = DailyEnergyLevel(user_id=user_id, date=day, mode=mode)
        db.session.add(level)
    db.session.commit()
    logger.debug("Energy level for user %s on %s set to %s", user_id, day, mode)
    return level


def list_energy_levels(user_id: int, start: date, end: date) -> list[DailyEnergyLevel]:
    return (
        DailyEnergyLevel.query.filter(
            DailyEnergyLevel.user_id == user_id,
            DailyEnergyLevel.date >= start,
            DailyEnergyLevel.date <= end,
        )
        .order_by(DailyEnergyLevel.date.asc())
        .all()
    )
