"""
Room type schemas.

``available_count`` is never accepted on update: inventory only moves
through booking transitions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from unistay.schemas.common import BaseCreateSchema, BaseSchema

__all__ = [
    "RoomTypeCreate",
    "RoomTypeSummary",
    "RoomTypeResponse",
]


class RoomTypeCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=2000)
    capacity: int = Field(1, ge=1, le=20, description="Occupants per room")
    price_per_month: Decimal = Field(..., ge=0, description="Monthly price")
    total_count: int = Field(..., ge=1, description="Number of rooms of this type")
    available_count: Optional[int] = Field(
        None,
        ge=0,
        description="Free rooms; defaults to total_count",
    )
    amenities: List[str] = Field(default_factory=list)

    @field_validator("amenities")
    @classmethod
    def dedupe_amenities(cls, v: List[str]) -> List[str]:
        cleaned = [a.strip() for a in v if a and a.strip()]
        return list(dict.fromkeys(cleaned))

    @model_validator(mode="after")
    def validate_inventory(self) -> "RoomTypeCreate":
        if self.available_count is not None and self.available_count > self.total_count:
            raise ValueError("available_count cannot exceed total_count")
        return self


class RoomTypeSummary(BaseSchema):
    id: str
    name: str
    price_per_month: Decimal


class RoomTypeResponse(RoomTypeSummary):
    hostel_id: str
    description: Optional[str] = None
    capacity: int
    total_count: int
    available_count: int
    amenities: List[str] = Field(default_factory=list)
