"""
Review service.

A student may review a hostel once, and only after staying there
(a confirmed or completed booking).
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unistay.core.exceptions import AuthorizationError, ConflictError, ErrorCode, NotFoundError
from unistay.core.pagination import normalize_pagination, paginate_items
from unistay.core.permissions import Principal, require_role
from unistay.models.enums import UserRole
from unistay.models.review import Review
from unistay.repositories.booking_repository import BookingRepository
from unistay.repositories.hostel_repository import HostelRepository
from unistay.repositories.review_repository import ReviewRepository
from unistay.schemas.common import PaginatedResponse
from unistay.schemas.review import ReviewCreate, ReviewResponse
from unistay.services.base_service import BaseService


class ReviewService(BaseService):

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.reviews = ReviewRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.hostels = HostelRepository(db_session)

    def list_reviews(
        self,
        *,
        hostel_id: Optional[str] = None,
        student_id: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[ReviewResponse]:
        params = normalize_pagination(page, limit)
        items, total = self.reviews.search(
            hostel_id=hostel_id,
            student_id=student_id,
            offset=params.offset,
            limit=params.limit,
        )
        return paginate_items(items=items, total=total, params=params, mapper=ReviewResponse.model_validate)

    def create_review(self, principal: Principal, data: ReviewCreate) -> ReviewResponse:
        """
        Raises:
            AuthorizationError: not a student, or no stay at the hostel
            NotFoundError: unknown hostel
            ConflictError: ALREADY_REVIEWED
        """
        require_role(principal, [UserRole.STUDENT], error_message="Only students can write reviews")

        if self.hostels.get_by_id(data.hostel_id) is None:
            raise NotFoundError("Hostel", data.hostel_id)

        if not self.bookings.has_stay_at_hostel(principal.user_id, data.hostel_id):
            raise AuthorizationError(
                "You can only review hostels you have booked",
                details={"hostel_id": data.hostel_id},
            )

        if self.reviews.get_for_student_and_hostel(principal.user_id, data.hostel_id) is not None:
            raise self._already_reviewed(data.hostel_id)

        try:
            with self.transaction():
                review = self.reviews.create(
                    Review(
                        student_id=principal.user_id,
                        hostel_id=data.hostel_id,
                        rating=data.rating,
                        comment=data.comment,
                    )
                )
        except IntegrityError as e:
            # lost a race with a concurrent review by the same student
            raise self._already_reviewed(data.hostel_id) from e

        self._logger.info(
            f"Review {review.id} added to hostel {data.hostel_id}",
            extra={"review_id": review.id, "hostel_id": data.hostel_id, "rating": data.rating},
        )
        self.db.refresh(review, attribute_names=["student"])
        return ReviewResponse.model_validate(review)

    @staticmethod
    def _already_reviewed(hostel_id: str) -> ConflictError:
        return ConflictError(
            "You have already reviewed this hostel",
            error_code=ErrorCode.ALREADY_REVIEWED,
            details={"hostel_id": hostel_id},
        )
