"""
Hostel listing model.

A hostel is owned by exactly one hostel-owner account and holds one or
more room types. ``is_active`` is the soft-delete flag gating public search.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unistay.models.base import BaseModel

if TYPE_CHECKING:
    from unistay.models.booking import Booking
    from unistay.models.review import Review
    from unistay.models.room_type import RoomType
    from unistay.models.university import University
    from unistay.models.user import User


class Hostel(BaseModel):
    """Listed student hostel."""

    __tablename__ = "hostels"

    owner_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    university_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("universities.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Basic Information
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)

    # Location
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    distance_from_university: Mapped[Optional[float]] = mapped_column(
        Float,
        nullable=True,
        comment="Distance in kilometres",
    )

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="hostels")
    university: Mapped[Optional["University"]] = relationship(back_populates="hostels")
    room_types: Mapped[List["RoomType"]] = relationship(
        back_populates="hostel",
        cascade="all, delete-orphan",
        order_by="RoomType.price_per_month",
    )
    bookings: Mapped[List["Booking"]] = relationship(back_populates="hostel")
    reviews: Mapped[List["Review"]] = relationship(back_populates="hostel")
