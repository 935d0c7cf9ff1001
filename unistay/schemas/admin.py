"""
Admin dashboard schemas.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from unistay.schemas.common import BaseSchema

__all__ = ["PlatformStats"]


class PlatformStats(BaseSchema):
    """Platform-wide counters for the admin dashboard."""

    total_users: int = Field(..., ge=0)
    total_hostels: int = Field(..., ge=0)
    total_bookings: int = Field(..., ge=0)
    total_revenue: Decimal = Field(..., description="Sum of confirmed and completed bookings")
    pending_verifications: int = Field(..., ge=0, description="Unverified students and owners")
    active_bookings: int = Field(..., ge=0, description="Confirmed bookings")
    average_rating: Optional[float] = None
