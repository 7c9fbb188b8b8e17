"""Task DTOs and schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from rhythm.core.utils.validation import OptionalDay


class TaskCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    emoji: Optional[str] = Field(default=None, max_length=16)
    identity_id: Optional[int] = None
    due_date: OptionalDay = None


class TaskUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    emoji: Optional[str] = Field(default=None, max_length=16)
    identity_id: Optional[int] = None
    sort_order: Optional[int] = Field(default=None, ge=0)
    due_date: OptionalDay = None
    completed: Optional[bool] = None
