"""Identity DTOs and schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class IdentityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    emoji: Optional[str] = Field(default=None, max_length=16)


class IdentityUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=255)
    emoji: Optional[str] = Field(default=None, max_length=16)
