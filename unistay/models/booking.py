"""
Booking models for student room reservations.

A booking is created ``pending`` by a student, moves through the lifecycle
enforced by ``BookingLifecycleManager`` and is never physically deleted.
Every transition is recorded in ``BookingStatusHistory``.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unistay.models.base import BaseModel, enum_values
from unistay.models.enums import BookingStatus

if TYPE_CHECKING:
    from unistay.models.hostel import Hostel
    from unistay.models.room_type import RoomType
    from unistay.models.user import User

__all__ = [
    "Booking",
    "BookingStatusHistory",
]


BOOKING_STATUS_TYPE = Enum(
    BookingStatus,
    values_callable=enum_values,
    native_enum=False,
    length=20,
)


class Booking(BaseModel):
    """
    Student reservation against a room type for a date range.

    Attributes:
        student_id: Student who created the booking
        hostel_id: Hostel being booked
        room_type_id: Room type being booked
        start_date: Start of the stay
        end_date: End of the stay, strictly after start_date
        total_price: Price fixed at creation time
        status: Current lifecycle status
        message: Optional note from the student to the owner
    """

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_bookings_date_order"),
        CheckConstraint("total_price >= 0", name="ck_bookings_price_non_negative"),
        Index("ix_bookings_hostel_status", "hostel_id", "status"),
        Index("ix_bookings_student_status", "student_id", "status"),
    )

    # Foreign Keys
    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    hostel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hostels.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    room_type_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("room_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Stay
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    total_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        BOOKING_STATUS_TYPE,
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    student: Mapped["User"] = relationship(back_populates="bookings")
    hostel: Mapped["Hostel"] = relationship(back_populates="bookings")
    room_type: Mapped["RoomType"] = relationship(back_populates="bookings")
    status_history: Mapped[List["BookingStatusHistory"]] = relationship(
        back_populates="booking",
        order_by="BookingStatusHistory.changed_at",
        cascade="all, delete-orphan",
    )


class BookingStatusHistory(BaseModel):
    """Audit row written in the same unit of work as each transition."""

    __tablename__ = "booking_status_history"

    booking_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    from_status: Mapped[Optional[BookingStatus]] = mapped_column(BOOKING_STATUS_TYPE, nullable=True)
    to_status: Mapped[BookingStatus] = mapped_column(BOOKING_STATUS_TYPE, nullable=False)
    changed_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    booking: Mapped["Booking"] = relationship(back_populates="status_history")
