"""
Hostel schemas for the public catalogue and owner management.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from unistay.schemas.common import BaseCreateSchema, BaseDBSchema, BaseSchema, BaseUpdateSchema
from unistay.schemas.review import ReviewResponse
from unistay.schemas.room_type import RoomTypeCreate, RoomTypeResponse
from unistay.schemas.university import UniversitySummary

__all__ = [
    "HostelCreate",
    "HostelUpdate",
    "HostelSearchParams",
    "HostelOwner",
    "HostelSummary",
    "HostelResponse",
    "HostelDetailResponse",
]


class HostelCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=200)
    address: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)
    university_id: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    distance_from_university: Optional[float] = Field(None, ge=0)
    room_types: List[RoomTypeCreate] = Field(
        default_factory=list,
        description="Room types created together with the hostel",
    )


class HostelUpdate(BaseUpdateSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)
    university_id: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    distance_from_university: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class HostelSearchParams(BaseSchema):
    """Public search filters."""

    search: Optional[str] = None
    university_id: Optional[str] = None
    min_price: Optional[Decimal] = Field(None, ge=0)
    max_price: Optional[Decimal] = Field(None, ge=0)


class HostelOwner(BaseSchema):
    id: str
    first_name: str
    last_name: str
    is_verified: bool


class HostelSummary(BaseSchema):
    """Hostel reference embedded in bookings."""

    id: str
    name: str
    address: str


class HostelResponse(BaseDBSchema):
    owner_id: str
    university_id: Optional[str] = None
    name: str
    description: Optional[str] = None
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_from_university: Optional[float] = None
    is_active: bool
    owner: Optional[HostelOwner] = None
    university: Optional[UniversitySummary] = None
    room_types: List[RoomTypeResponse] = Field(default_factory=list)
    average_rating: Optional[float] = None
    review_count: int = 0


class HostelDetailResponse(HostelResponse):
    reviews: List[ReviewResponse] = Field(default_factory=list)
