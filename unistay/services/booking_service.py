"""
Booking service: creation, role-scoped reads and status updates.
"""

from typing import Optional

from sqlalchemy.orm import Session

from unistay.core.exceptions import ErrorCode, NotFoundError, ValidationError
from unistay.core.pagination import normalize_pagination, paginate_items
from unistay.core.permissions import Principal, authorize_booking_view, require_role
from unistay.models.booking import Booking
from unistay.models.enums import BookingStatus, UserRole
from unistay.repositories.booking_repository import BookingRepository
from unistay.repositories.hostel_repository import HostelRepository
from unistay.repositories.room_type_repository import RoomTypeRepository
from unistay.schemas.booking import (
    BookingCreate,
    BookingDetailResponse,
    BookingResponse,
    BookingStatusHistoryResponse,
)
from unistay.schemas.common import PaginatedResponse
from unistay.services.base_service import BaseService
from unistay.services.booking_lifecycle import BookingLifecycleManager
from unistay.services.pricing import as_utc, calculate_total_price


class BookingService(BaseService):
    """
    High-level booking operations.

    Status changes are delegated to ``BookingLifecycleManager``; this class
    only owns creation and reads.
    """

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.bookings = BookingRepository(db_session)
        self.hostels = HostelRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.lifecycle = BookingLifecycleManager(db_session, **kwargs)

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    def create_booking(self, principal: Principal, data: BookingCreate) -> BookingResponse:
        """
        Create a pending booking for the calling student.

        A pending booking reserves nothing: the availability check here only
        rejects requests for room types that are already full.

        Raises:
            AuthorizationError: caller is not a student
            ValidationError: date range, room type or availability problems
        """
        require_role(principal, [UserRole.STUDENT], error_message="Only students can create bookings")

        start_date = as_utc(data.start_date)
        end_date = as_utc(data.end_date)
        if end_date <= start_date:
            raise ValidationError(
                "end_date must be after start_date",
                error_code=ErrorCode.INVALID_DATE_RANGE,
                field_errors={"end_date": ["must be after start_date"]},
            )

        hostel = self.hostels.get_active(data.hostel_id)
        if hostel is None:
            raise ValidationError(
                "Hostel does not exist or is not accepting bookings",
                field_errors={"hostel_id": ["unknown or inactive hostel"]},
            )

        room_type = self.room_types.get_for_hostel(data.room_type_id, hostel.id)
        if room_type is None:
            raise ValidationError(
                "Room type does not belong to this hostel",
                error_code=ErrorCode.INVALID_ROOM_TYPE,
                field_errors={"room_type_id": ["not a room type of this hostel"]},
            )
        if room_type.available_count <= 0:
            raise ValidationError(
                "No rooms of this type are available",
                error_code=ErrorCode.NO_ROOMS_AVAILABLE,
                details={"room_type_id": room_type.id},
            )

        total_price = calculate_total_price(room_type.price_per_month, start_date, end_date)

        with self.transaction():
            booking = self.bookings.create(
                Booking(
                    student_id=principal.user_id,
                    hostel_id=hostel.id,
                    room_type_id=room_type.id,
                    start_date=start_date,
                    end_date=end_date,
                    total_price=total_price,
                    status=BookingStatus.PENDING,
                    message=data.message,
                )
            )
            self.bookings.add_status_history(booking.id, None, BookingStatus.PENDING, principal.user_id)

        self._logger.info(
            f"Booking {booking.id} created for room type {room_type.id}",
            extra={
                "booking_id": booking.id,
                "student_id": principal.user_id,
                "hostel_id": hostel.id,
                "total_price": str(total_price),
            },
        )
        return BookingResponse.model_validate(self.bookings.get_with_relations(booking.id))

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def get_booking(self, principal: Principal, booking_id: str) -> BookingDetailResponse:
        booking = self.bookings.get_with_relations(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)
        authorize_booking_view(principal, booking)

        response = BookingDetailResponse.model_validate(booking)
        response.status_history = [
            BookingStatusHistoryResponse.model_validate(entry) for entry in self.bookings.history(booking.id)
        ]
        return response

    def list_bookings(
        self,
        principal: Principal,
        *,
        status: Optional[BookingStatus] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[BookingResponse]:
        params = normalize_pagination(page, limit)
        items, total = self.bookings.list_for_principal(
            user_id=principal.user_id,
            role=principal.role,
            status=status,
            offset=params.offset,
            limit=params.limit,
        )
        return paginate_items(items=items, total=total, params=params, mapper=BookingResponse.model_validate)

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    def update_status(self, principal: Principal, booking_id: str, target: BookingStatus) -> BookingResponse:
        result = self.lifecycle.transition(principal, booking_id, target)
        return BookingResponse.model_validate(self.bookings.get_with_relations(result.booking.id))
