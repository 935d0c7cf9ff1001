"""
Booking lifecycle: status transitions and room inventory reconciliation.

State machine::

    pending ──► confirmed ──► completed
       │            │
       └──► cancelled ◄──┘

Entering ``confirmed`` reserves one unit of the booking's room type;
leaving ``confirmed`` for ``cancelled`` gives it back. The status write,
the inventory update and the history row commit or roll back together.
"""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from unistay.core.exceptions import ConflictError, ErrorCode, NotFoundError
from unistay.core.permissions import Principal, authorize_booking_transition
from unistay.models.booking import Booking
from unistay.models.enums import BookingStatus
from unistay.repositories.booking_repository import BookingRepository
from unistay.repositories.room_type_repository import RoomTypeRepository
from unistay.services.base_service import BaseService


class InventoryEffect:
    NONE = 0
    RESERVE = -1
    RELEASE = 1


def inventory_effect(current: BookingStatus, target: BookingStatus) -> int:
    """Unit change applied to ``available_count`` for a valid transition."""
    if target == BookingStatus.CONFIRMED:
        return InventoryEffect.RESERVE
    if current == BookingStatus.CONFIRMED and target == BookingStatus.CANCELLED:
        return InventoryEffect.RELEASE
    return InventoryEffect.NONE


@dataclass
class TransitionResult:
    booking: Booking
    from_status: BookingStatus
    to_status: BookingStatus
    inventory_delta: int


class BookingLifecycleManager(BaseService):
    """
    Applies booking status transitions.

    Authorization and transition validity are decided by
    ``authorize_booking_transition`` before anything is written.
    """

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.bookings = BookingRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)

    def transition(
        self,
        principal: Principal,
        booking_id: str,
        target: BookingStatus,
    ) -> TransitionResult:
        """
        Move a booking to ``target``.

        Args:
            principal: Caller
            booking_id: Booking to update
            target: Requested status

        Returns:
            TransitionResult with the refreshed booking

        Raises:
            NotFoundError: booking does not exist
            AuthorizationError: caller unrelated, or edge reserved for another party
            ConflictError: INVALID_TRANSITION, NO_ROOMS_AVAILABLE, CONCURRENT_UPDATE
                or TRANSACTION_RETRY_EXHAUSTED
        """
        result = self.run_in_transaction(
            "booking status transition",
            lambda: self._apply(principal, booking_id, target),
        )
        self._logger.info(
            f"Booking {booking_id} moved {result.from_status.value} -> {result.to_status.value}",
            extra={
                "booking_id": booking_id,
                "from_status": result.from_status.value,
                "to_status": result.to_status.value,
                "inventory_delta": result.inventory_delta,
                "changed_by": principal.user_id,
            },
        )
        return result

    def _apply(self, principal: Principal, booking_id: str, target: BookingStatus) -> TransitionResult:
        booking = self.bookings.get_with_relations(booking_id)
        if booking is None:
            raise NotFoundError("Booking", booking_id)

        current = booking.status
        authorize_booking_transition(principal, booking, target)

        if not self.bookings.compare_and_set_status(booking.id, current, target):
            raise ConflictError(
                "The booking was updated by someone else; reload and try again",
                error_code=ErrorCode.CONCURRENT_UPDATE,
                details={"booking_id": booking.id, "expected_status": current.value},
            )

        delta = inventory_effect(current, target)
        if delta == InventoryEffect.RESERVE:
            if not self.room_types.try_reserve_unit(booking.room_type_id):
                raise ConflictError(
                    "No rooms of this type are available",
                    error_code=ErrorCode.NO_ROOMS_AVAILABLE,
                    details={"room_type_id": booking.room_type_id},
                )
        elif delta == InventoryEffect.RELEASE:
            if not self.room_types.release_unit(booking.room_type_id):
                # available_count already equals total_count; never exceed it
                self._logger.warning(
                    f"Room type {booking.room_type_id} already at full inventory; no unit released",
                    extra={"booking_id": booking.id, "room_type_id": booking.room_type_id},
                )
                delta = InventoryEffect.NONE

        self.bookings.add_status_history(booking.id, current, target, principal.user_id)
        return TransitionResult(
            booking=booking,
            from_status=current,
            to_status=target,
            inventory_delta=delta,
        )

