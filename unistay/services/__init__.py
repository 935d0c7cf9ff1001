from unistay.services.admin_service import AdminService
from unistay.services.booking_lifecycle import BookingLifecycleManager, TransitionResult
from unistay.services.booking_service import BookingService
from unistay.services.hostel_service import HostelService
from unistay.services.review_service import ReviewService
from unistay.services.university_service import UniversityService
from unistay.services.user_service import UserService

__all__ = [
    "AdminService",
    "BookingLifecycleManager",
    "TransitionResult",
    "BookingService",
    "HostelService",
    "ReviewService",
    "UniversityService",
    "UserService",
]
