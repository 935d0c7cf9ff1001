from unistay.repositories.base_repository import BaseRepository
from unistay.repositories.booking_repository import BookingRepository
from unistay.repositories.hostel_repository import HostelRepository
from unistay.repositories.review_repository import ReviewRepository
from unistay.repositories.room_type_repository import RoomTypeRepository
from unistay.repositories.university_repository import UniversityRepository
from unistay.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BookingRepository",
    "HostelRepository",
    "ReviewRepository",
    "RoomTypeRepository",
    "UniversityRepository",
    "UserRepository",
]
