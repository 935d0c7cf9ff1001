# models/__init__.py
from .base import Base, BaseModel
from .enums import BookingStatus, UserRole
from .user import User
from .university import University
from .hostel import Hostel
from .room_type import RoomType
from .booking import Booking, BookingStatusHistory
from .review import Review

__all__ = [
    "Base",
    "BaseModel",
    "BookingStatus",
    "UserRole",
    "User",
    "University",
    "Hostel",
    "RoomType",
    "Booking",
    "BookingStatusHistory",
    "Review",
]
