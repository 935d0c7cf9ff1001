"""
University model used to anchor hostel search.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Boolean, Float, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from unistay.models.base import BaseModel

if TYPE_CHECKING:
    from unistay.models.hostel import Hostel


class University(BaseModel):
    """A university students search hostels near."""

    __tablename__ = "universities"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    short_code: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    latitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    longitude: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    hostels: Mapped[List["Hostel"]] = relationship(back_populates="university")
