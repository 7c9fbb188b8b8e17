"""Energy, radar and reflection request schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from rhythm.core.utils.validation import OptionalDay


class EnergyQuery(BaseModel):
    date: OptionalDay = None


class EnergyUpdate(BaseModel):
    # Validated against ENERGY_MODES in the service so the error carries invalid_mode
    mode: str
    date: OptionalDay = None


class RadarUpdate(BaseModel):
    body: Optional[str] = None
    mind: Optional[str] = None
    profession: Optional[str] = None
    projects: Optional[str] = None
    environment: Optional[str] = None
    notes: Optional[str] = Field(default=None, max_length=4096)


class ReflectionAnswer(BaseModel):
    answer: str = Field(min_length=1, max_length=300)
