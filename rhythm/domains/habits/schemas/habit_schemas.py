"""Habit DTOs and schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from rhythm.core.utils.validation import OptionalDay

Frequency = Literal["DAILY", "WEEKDAYS", "WEEKENDS", "SPECIFIC_DAYS", "X_PER_WEEK"]
EnergyMode = Literal["FULL", "RECOVERY", "MINIMAL"]


class HabitCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    emoji: Optional[str] = Field(default=None, max_length=16)
    identity_id: Optional[int] = None
    frequency: Frequency = "DAILY"
    scheduled_days: List[int] = Field(default_factory=list)
    target_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    full_description: Optional[str] = Field(default=None, max_length=4096)
    recovery_description: Optional[str] = Field(default=None, max_length=4096)
    minimal_description: Optional[str] = Field(default=None, max_length=4096)


class HabitUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    emoji: Optional[str] = Field(default=None, max_length=16)
    identity_id: Optional[int] = None
    sort_order: Optional[int] = Field(default=None, ge=0)
    frequency: Optional[Frequency] = None
    scheduled_days: Optional[List[int]] = None
    target_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    full_description: Optional[str] = Field(default=None, max_length=4096)
    recovery_description: Optional[str] = Field(default=None, max_length=4096)
    minimal_description: Optional[str] = Field(default=None, max_length=4096)


class CompletionToggle(BaseModel):
    mode: Optional[EnergyMode] = None
    date: OptionalDay = None


class TodayQuery(BaseModel):
    date: OptionalDay = None
