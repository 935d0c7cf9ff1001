"""SQLAlchemy metadata with every model registered."""
from unistay.models import (  # noqa: F401
    Base,
    Booking,
    BookingStatusHistory,
    Hostel,
    Review,
    RoomType,
    University,
    User,
)

__all__ = ["Base"]
