"""
User schemas for profiles and admin moderation.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from unistay.models.enums import UserRole
from unistay.schemas.common import BaseDBSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "UserSummary",
    "UserResponse",
    "UserProfileResponse",
    "UserProfileUpdate",
    "UserModerationUpdate",
]


class UserSummary(BaseSchema):
    """Minimal user reference embedded in other resources."""

    id: str
    first_name: str
    last_name: str
    email: str


class UserResponse(BaseDBSchema):
    email: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole
    is_verified: bool
    is_active: bool


class UserProfileResponse(UserResponse):
    """Authenticated user's own profile with activity counts."""

    booking_count: int = 0
    review_count: int = 0
    hostel_count: int = 0


class UserProfileUpdate(BaseUpdateSchema):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)


class UserModerationUpdate(BaseUpdateSchema):
    """Admin-only account flags."""

    is_verified: Optional[bool] = Field(None, description="Mark the account as verified")
    is_active: Optional[bool] = Field(None, description="Enable or disable the account")
