"""Pomodoro session schemas."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from rhythm.core.utils.validation import OptionalDay

SessionMode = Literal["work", "shortBreak", "longBreak"]
StatsPeriod = Literal["day", "week", "month"]


class SessionCreate(BaseModel):
    mode: SessionMode
    duration: int = Field(gt=0, le=24 * 60)
    habit_id: Optional[int] = None
    task_id: Optional[int] = None
    task_name: Optional[str] = Field(default=None, max_length=255)


class SessionQuery(BaseModel):
    date: OptionalDay = None
    habit_id: Optional[int] = None
    task_id: Optional[int] = None


class FocusStatsQuery(BaseModel):
    period: StatsPeriod = "week"
