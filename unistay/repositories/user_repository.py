"""
User repository.
"""

from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from unistay.models.booking import Booking
from unistay.models.enums import UserRole
from unistay.models.hostel import Hostel
from unistay.models.review import Review
from unistay.models.user import User
from unistay.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.scalar(select(User).where(func.lower(User.email) == email.lower()))

    def search(
        self,
        *,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[User], int]:
        """Admin listing filtered by role and a case-insensitive name/email match."""
        stmt = select(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
        if search:
            stmt = stmt.where(self.text_match(search, User.first_name, User.last_name, User.email))
        stmt = stmt.order_by(User.created_at.desc(), User.id)
        return self.paginate(stmt, offset, limit)

    def count_pending_verifications(self) -> int:
        return self.count(
            User.is_verified.is_(False),
            User.role.in_([UserRole.STUDENT, UserRole.HOSTEL_OWNER]),
        )

    def activity_counts(self, user_id: str) -> Dict[str, int]:
        """Bookings, reviews and hostels attached to one user."""
        return {
            "booking_count": int(
                self.db.scalar(select(func.count()).select_from(Booking).where(Booking.student_id == user_id)) or 0
            ),
            "review_count": int(
                self.db.scalar(select(func.count()).select_from(Review).where(Review.student_id == user_id)) or 0
            ),
            "hostel_count": int(
                self.db.scalar(select(func.count()).select_from(Hostel).where(Hostel.owner_id == user_id)) or 0
            ),
        }
