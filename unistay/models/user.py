"""
User model for students, hostel owners and administrators.

Credentials are issued by the external identity provider; this table only
carries the profile and moderation flags the marketplace needs.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unistay.models.base import BaseModel, enum_values
from unistay.models.enums import UserRole

if TYPE_CHECKING:
    from unistay.models.booking import Booking
    from unistay.models.hostel import Hostel
    from unistay.models.review import Review


class User(BaseModel):
    """Marketplace account."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, values_callable=enum_values, native_enum=False, length=20),
        nullable=False,
        default=UserRole.STUDENT,
        index=True,
    )

    # Moderation
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    hostels: Mapped[List["Hostel"]] = relationship(back_populates="owner")
    bookings: Mapped[List["Booking"]] = relationship(back_populates="student")
    reviews: Mapped[List["Review"]] = relationship(back_populates="student")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
