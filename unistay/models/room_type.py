"""
Room type model with pricing and inventory counts.

``available_count`` is the number of free units; it is only changed by the
booking lifecycle through conditional updates and is bounded by
``0 <= available_count <= total_count`` at the database level too.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from unistay.models.base import BaseModel

if TYPE_CHECKING:
    from unistay.models.booking import Booking
    from unistay.models.hostel import Hostel


class RoomType(BaseModel):
    """A category of room inside a hostel with its own price and inventory."""

    __tablename__ = "room_types"
    __table_args__ = (
        CheckConstraint("price_per_month >= 0", name="ck_room_types_price_non_negative"),
        CheckConstraint("total_count >= 1", name="ck_room_types_total_positive"),
        CheckConstraint("available_count >= 0", name="ck_room_types_available_non_negative"),
        CheckConstraint("available_count <= total_count", name="ck_room_types_available_within_total"),
    )

    hostel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hostels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    price_per_month: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # Inventory
    total_count: Mapped[int] = mapped_column(Integer, nullable=False)
    available_count: Mapped[int] = mapped_column(Integer, nullable=False)

    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    # Relationships
    hostel: Mapped["Hostel"] = relationship(back_populates="room_types")
    bookings: Mapped[List["Booking"]] = relationship(back_populates="room_type")

    @validates("amenities")
    def _dedupe_amenities(self, key, value):
        # Amenities behave as a set; keep first-seen order for display.
        return list(dict.fromkeys(value or []))

    @property
    def has_availability(self) -> bool:
        return self.available_count > 0
