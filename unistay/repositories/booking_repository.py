"""
Booking repository: role-scoped listing, compare-and-set status writes
and status history.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from unistay.config.logging import get_logger
from unistay.models.booking import Booking, BookingStatusHistory
from unistay.models.enums import BookingStatus, UserRole
from unistay.models.hostel import Hostel
from unistay.models.user import User
from unistay.repositories.base_repository import BaseRepository

logger = get_logger(__name__)


class BookingRepository(BaseRepository[Booking]):

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    # ==================== Lookups ====================

    def get_with_relations(self, booking_id: str) -> Optional[Booking]:
        """Load a booking with its hostel, room type and student, bypassing stale session state."""
        return self.db.scalar(
            select(Booking)
            .where(Booking.id == booking_id)
            .options(
                selectinload(Booking.hostel),
                selectinload(Booking.room_type),
                selectinload(Booking.student),
            )
            .execution_options(populate_existing=True)
        )

    def list_for_principal(
        self,
        *,
        user_id: str,
        role: UserRole,
        status: Optional[BookingStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Booking], int]:
        """
        Bookings visible to a caller, newest first.

        Students see their own bookings, hostel owners see bookings on the
        hostels they own, admins see everything.
        """
        stmt = select(Booking)
        if role == UserRole.STUDENT:
            stmt = stmt.where(Booking.student_id == user_id)
        elif role == UserRole.HOSTEL_OWNER:
            stmt = stmt.join(Hostel, Hostel.id == Booking.hostel_id).where(Hostel.owner_id == user_id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = self._with_relations(stmt).order_by(Booking.created_at.desc(), Booking.id)
        return self.paginate(stmt, offset, limit)

    def search_all(
        self,
        *,
        status: Optional[BookingStatus] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Booking], int]:
        """Admin listing; ``search`` matches student name/email or hostel name/address."""
        stmt = (
            select(Booking)
            .join(User, User.id == Booking.student_id)
            .join(Hostel, Hostel.id == Booking.hostel_id)
        )
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        if search:
            stmt = stmt.where(
                self.text_match(search, User.first_name, User.last_name, User.email, Hostel.name, Hostel.address)
            )
        stmt = self._with_relations(stmt).order_by(Booking.created_at.desc(), Booking.id)
        return self.paginate(stmt, offset, limit)

    def has_stay_at_hostel(self, student_id: str, hostel_id: str) -> bool:
        """True if the student holds a confirmed or completed booking at the hostel."""
        return self.count(
            Booking.student_id == student_id,
            Booking.hostel_id == hostel_id,
            Booking.status.in_([BookingStatus.CONFIRMED, BookingStatus.COMPLETED]),
        ) > 0

    # ==================== Status ====================

    def compare_and_set_status(
        self,
        booking_id: str,
        expected: BookingStatus,
        target: BookingStatus,
    ) -> bool:
        """
        Write ``target`` only if the stored status is still ``expected``.

        Returns:
            False when another writer changed the status first
        """
        result = self.db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status == expected)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        swapped = result.rowcount == 1
        if swapped:
            self.get_by_id(booking_id, refresh=True)
        return swapped

    def add_status_history(
        self,
        booking_id: str,
        from_status: Optional[BookingStatus],
        to_status: BookingStatus,
        changed_by: Optional[str],
    ) -> BookingStatusHistory:
        entry = BookingStatusHistory(
            booking_id=booking_id,
            from_status=from_status,
            to_status=to_status,
            changed_by=changed_by,
            changed_at=datetime.now(timezone.utc),
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def history(self, booking_id: str) -> List[BookingStatusHistory]:
        return list(
            self.db.scalars(
                select(BookingStatusHistory)
                .where(BookingStatusHistory.booking_id == booking_id)
                .order_by(BookingStatusHistory.changed_at, BookingStatusHistory.id)
            )
        )

    # ==================== Aggregates ====================

    def revenue(self) -> Decimal:
        """Sum of total_price over confirmed and completed bookings."""
        total = self.db.scalar(
            select(func.coalesce(func.sum(Booking.total_price), 0)).where(
                Booking.status.in_([BookingStatus.CONFIRMED, BookingStatus.COMPLETED])
            )
        )
        return Decimal(str(total or 0))

    @staticmethod
    def _with_relations(stmt):
        return stmt.options(
            selectinload(Booking.hostel),
            selectinload(Booking.room_type),
            selectinload(Booking.student),
        )
