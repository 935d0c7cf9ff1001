"""
Admin dashboard, user moderation and listing oversight.
"""

from typing import Optional

from sqlalchemy.orm import Session

from unistay.core.exceptions import NotFoundError
from unistay.core.pagination import normalize_pagination, paginate_items
from unistay.core.permissions import Principal, require_role
from unistay.models.enums import BookingStatus, UserRole
from unistay.repositories.booking_repository import BookingRepository
from unistay.repositories.hostel_repository import HostelRepository
from unistay.repositories.review_repository import ReviewRepository
from unistay.repositories.user_repository import UserRepository
from unistay.schemas.admin import PlatformStats
from unistay.schemas.booking import BookingResponse
from unistay.schemas.common import PaginatedResponse
from unistay.schemas.hostel import HostelResponse
from unistay.schemas.user import UserModerationUpdate, UserResponse
from unistay.services.base_service import BaseService
from unistay.services.hostel_service import HostelService


class AdminService(BaseService):
    """Every public method requires the admin role."""

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.users = UserRepository(db_session)
        self.hostels = HostelRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.reviews = ReviewRepository(db_session)
        self.hostel_service = HostelService(db_session, **kwargs)

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    def get_stats(self, principal: Principal) -> PlatformStats:
        require_role(principal, [UserRole.ADMIN])
        return PlatformStats(
            total_users=self.users.count(),
            total_hostels=self.hostels.count(),
            total_bookings=self.bookings.count(),
            total_revenue=self.bookings.revenue(),
            pending_verifications=self.users.count_pending_verifications(),
            active_bookings=self.bookings.count(self.bookings.model.status == BookingStatus.CONFIRMED),
            average_rating=self.reviews.average_rating(),
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def list_users(
        self,
        principal: Principal,
        *,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[UserResponse]:
        require_role(principal, [UserRole.ADMIN])
        params = normalize_pagination(page, limit)
        items, total = self.users.search(role=role, search=search, offset=params.offset, limit=params.limit)
        return paginate_items(items=items, total=total, params=params, mapper=UserResponse.model_validate)

    def moderate_user(self, principal: Principal, user_id: str, data: UserModerationUpdate) -> UserResponse:
        require_role(principal, [UserRole.ADMIN])
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self.transaction():
            self.users.update_fields(user, changes)

        self._logger.info(
            f"User {user_id} moderated",
            extra={"target_user_id": user_id, "changes": changes, "changed_by": principal.user_id},
        )
        return UserResponse.model_validate(user)

    # -------------------------------------------------------------------------
    # Listings
    # -------------------------------------------------------------------------

    def list_hostels(
        self,
        principal: Principal,
        *,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[HostelResponse]:
        require_role(principal, [UserRole.ADMIN])
        params = normalize_pagination(page, limit)
        items, total = self.hostels.search_all(
            search=search,
            is_active=is_active,
            offset=params.offset,
            limit=params.limit,
        )
        stats = self.hostels.rating_stats(h.id for h in items)
        return paginate_items(
            items=items,
            total=total,
            params=params,
            mapper=lambda hostel: self.hostel_service.to_response(hostel, stats),
        )

    def list_bookings(
        self,
        principal: Principal,
        *,
        status: Optional[BookingStatus] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[BookingResponse]:
        require_role(principal, [UserRole.ADMIN])
        params = normalize_pagination(page, limit)
        items, total = self.bookings.search_all(
            status=status,
            search=search,
            offset=params.offset,
            limit=params.limit,
        )
        return paginate_items(items=items, total=total, params=params, mapper=BookingResponse.model_validate)
