"""
Booking endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from unistay.api.deps import get_current_principal, get_db
from unistay.core.permissions import Principal
from unistay.core.rate_limiting import rate_limit
from unistay.models.enums import BookingStatus
from unistay.schemas.booking import BookingCreate, BookingDetailResponse, BookingResponse, BookingStatusUpdate
from unistay.schemas.common import PaginatedResponse
from unistay.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("write"))],
)
def create_booking(
    payload: BookingCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> BookingResponse:
    """Create a pending booking (students only)."""
    return BookingService(db).create_booking(principal, payload)


@router.get(
    "",
    response_model=PaginatedResponse[BookingResponse],
    dependencies=[Depends(rate_limit())],
)
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    """Bookings visible to the caller, newest first."""
    return BookingService(db).list_bookings(principal, status=status_filter, page=page, limit=limit)


@router.get(
    "/{booking_id}",
    response_model=BookingDetailResponse,
    dependencies=[Depends(rate_limit())],
)
def get_booking(
    booking_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> BookingDetailResponse:
    return BookingService(db).get_booking(principal, booking_id)


@router.put(
    "/{booking_id}",
    response_model=BookingResponse,
    dependencies=[Depends(rate_limit("write"))],
)
def update_booking_status(
    booking_id: str,
    payload: BookingStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> BookingResponse:
    """Move the booking to the requested status."""
    return BookingService(db).update_status(principal, booking_id, payload.status)
