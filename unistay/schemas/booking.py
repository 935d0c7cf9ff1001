"""
Booking schemas for creation, status updates and responses.

Date ordering, room/hostel consistency and pricing are enforced by
``BookingService`` so they produce domain error codes rather than generic
schema errors.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from unistay.models.enums import BookingStatus
from unistay.schemas.common import BaseCreateSchema, BaseDBSchema, BaseSchema, BaseUpdateSchema
from unistay.schemas.hostel import HostelSummary
from unistay.schemas.room_type import RoomTypeSummary
from unistay.schemas.user import UserSummary

__all__ = [
    "BookingCreate",
    "BookingStatusUpdate",
    "BookingStatusHistoryResponse",
    "BookingResponse",
    "BookingDetailResponse",
]


class BookingCreate(BaseCreateSchema):
    hostel_id: str = Field(..., min_length=1, description="Hostel being booked")
    room_type_id: str = Field(..., min_length=1, description="Room type being booked")
    start_date: datetime = Field(..., description="Start of the stay")
    end_date: datetime = Field(..., description="End of the stay, after start_date")
    message: Optional[str] = Field(None, max_length=1000, description="Note to the hostel owner")


class BookingStatusUpdate(BaseUpdateSchema):
    status: BookingStatus = Field(..., description="Requested status")


class BookingStatusHistoryResponse(BaseSchema):
    from_status: Optional[BookingStatus] = None
    to_status: BookingStatus
    changed_by: Optional[str] = None
    changed_at: datetime


class BookingResponse(BaseDBSchema):
    student_id: str
    hostel_id: str
    room_type_id: str
    start_date: datetime
    end_date: datetime
    total_price: Decimal
    status: BookingStatus
    message: Optional[str] = None
    student: Optional[UserSummary] = None
    hostel: Optional[HostelSummary] = None
    room_type: Optional[RoomTypeSummary] = None


class BookingDetailResponse(BookingResponse):
    status_history: List[BookingStatusHistoryResponse] = Field(default_factory=list)
