"""Typed schemas for user and settings IO."""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from rhythm.core.utils.validation import OptionalDay

if TYPE_CHECKING:
    from rhythm.core.users.models import User


class UserResponse(BaseModel):
    # Response should not re-validate persisted emails
    id: int
    email: str
    full_name: Optional[str] = None
    timezone: Optional[str] = None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class SettingsUpdate(BaseModel):
    rest_days: Optional[List[int]] = None
    vacation_mode: Optional[bool] = None
    vacation_start: OptionalDay = None
    vacation_end: OptionalDay = None


def serialize_user(user: "User") -> UserResponse:
    return UserResponse.model_validate(user)
