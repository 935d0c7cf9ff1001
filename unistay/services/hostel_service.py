"""
Hostel catalogue service.

Public search and detail pages only ever show active hostels; owners and
admins manage listings and their room types.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from unistay.core.exceptions import NotFoundError, ValidationError
from unistay.core.pagination import normalize_pagination, paginate_items
from unistay.core.permissions import Principal, authorize_hostel_management, require_role
from unistay.models.hostel import Hostel
from unistay.models.room_type import RoomType
from unistay.models.enums import UserRole
from unistay.repositories.hostel_repository import HostelRepository, RatingStats
from unistay.repositories.review_repository import ReviewRepository
from unistay.repositories.room_type_repository import RoomTypeRepository
from unistay.repositories.university_repository import UniversityRepository
from unistay.schemas.common import PaginatedResponse
from unistay.schemas.hostel import (
    HostelCreate,
    HostelDetailResponse,
    HostelResponse,
    HostelSearchParams,
    HostelUpdate,
)
from unistay.schemas.review import ReviewResponse
from unistay.schemas.room_type import RoomTypeCreate, RoomTypeResponse
from unistay.services.base_service import BaseService

LATEST_REVIEWS_ON_DETAIL = 10


class HostelService(BaseService):

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.hostels = HostelRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.reviews = ReviewRepository(db_session)
        self.universities = UniversityRepository(db_session)

    # -------------------------------------------------------------------------
    # Public catalogue
    # -------------------------------------------------------------------------

    def search(
        self,
        filters: HostelSearchParams,
        *,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> PaginatedResponse[HostelResponse]:
        """
        Search active hostels of verified owners.

        Each result lists only room types with free units plus the hostel's
        rating aggregate.
        """
        if (
            filters.min_price is not None
            and filters.max_price is not None
            and filters.min_price > filters.max_price
        ):
            raise ValidationError(
                "min_price cannot be greater than max_price",
                field_errors={"min_price": ["must not exceed max_price"]},
            )

        params = normalize_pagination(page, limit)
        hostels, total = self.hostels.search_public(
            search=filters.search,
            university_id=filters.university_id,
            min_price=filters.min_price,
            max_price=filters.max_price,
            offset=params.offset,
            limit=params.limit,
        )
        stats = self.hostels.rating_stats(h.id for h in hostels)
        return paginate_items(
            items=hostels,
            total=total,
            params=params,
            mapper=lambda hostel: self._to_response(hostel, stats, available_only=True),
        )

    def get_public_detail(self, hostel_id: str) -> HostelDetailResponse:
        hostel = self.hostels.get_active(hostel_id)
        if hostel is None:
            raise NotFoundError("Hostel", hostel_id)

        stats = self.hostels.rating_stats([hostel.id])
        response = HostelDetailResponse.model_validate(hostel)
        self._decorate(response, hostel, stats, available_only=True)
        response.reviews = [
            ReviewResponse.model_validate(review)
            for review in self.reviews.latest_for_hostel(hostel.id, LATEST_REVIEWS_ON_DETAIL)
        ]
        return response

    # -------------------------------------------------------------------------
    # Owner management
    # -------------------------------------------------------------------------

    def create_hostel(self, principal: Principal, data: HostelCreate) -> HostelResponse:
        require_role(principal, [UserRole.HOSTEL_OWNER], error_message="Only hostel owners can create hostels")
        self._check_university(data.university_id)

        fields = data.model_dump(exclude={"room_types"})
        with self.transaction():
            hostel = self.hostels.create(Hostel(owner_id=principal.user_id, is_active=True, **fields))
            for room_type in data.room_types:
                self.room_types.create(self._build_room_type(hostel.id, room_type))

        self._logger.info(
            f"Hostel {hostel.id} created by owner {principal.user_id}",
            extra={"hostel_id": hostel.id, "room_type_count": len(data.room_types)},
        )
        return self._reload(hostel.id)

    def update_hostel(self, principal: Principal, hostel_id: str, data: HostelUpdate) -> HostelResponse:
        hostel = self._get_or_404(hostel_id)
        authorize_hostel_management(principal, hostel)

        changes = data.model_dump(exclude_unset=True)
        if "university_id" in changes:
            self._check_university(changes["university_id"])
        for required in ("name", "address"):
            if required in changes and changes[required] is None:
                raise ValidationError(
                    f"{required} cannot be empty",
                    field_errors={required: ["cannot be empty"]},
                )

        with self.transaction():
            self.hostels.update_fields(hostel, changes)

        self._logger.info(
            f"Hostel {hostel_id} updated",
            extra={"hostel_id": hostel_id, "fields": sorted(changes), "changed_by": principal.user_id},
        )
        return self._reload(hostel_id)

    def deactivate_hostel(self, principal: Principal, hostel_id: str) -> None:
        """Soft delete: the hostel disappears from search but keeps its bookings."""
        hostel = self._get_or_404(hostel_id)
        authorize_hostel_management(principal, hostel)

        with self.transaction():
            self.hostels.update_fields(hostel, {"is_active": False})

        self._logger.info(
            f"Hostel {hostel_id} deactivated",
            extra={"hostel_id": hostel_id, "changed_by": principal.user_id},
        )

    def add_room_type(self, principal: Principal, hostel_id: str, data: RoomTypeCreate) -> RoomTypeResponse:
        hostel = self._get_or_404(hostel_id)
        authorize_hostel_management(principal, hostel)

        with self.transaction():
            room_type = self.room_types.create(self._build_room_type(hostel.id, data))

        return RoomTypeResponse.model_validate(room_type)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def to_response(self, hostel: Hostel, stats: Dict[str, RatingStats]) -> HostelResponse:
        """Response with every room type, used by owner and admin views."""
        return self._to_response(hostel, stats, available_only=False)

    def _to_response(
        self,
        hostel: Hostel,
        stats: Dict[str, RatingStats],
        *,
        available_only: bool,
    ) -> HostelResponse:
        response = HostelResponse.model_validate(hostel)
        self._decorate(response, hostel, stats, available_only=available_only)
        return response

    @staticmethod
    def _decorate(
        response: HostelResponse,
        hostel: Hostel,
        stats: Dict[str, RatingStats],
        *,
        available_only: bool,
    ) -> None:
        room_types: List[RoomType] = [
            rt for rt in hostel.room_types if rt.available_count > 0 or not available_only
        ]
        response.room_types = [RoomTypeResponse.model_validate(rt) for rt in room_types]
        average, count = stats.get(hostel.id, (None, 0))
        response.average_rating = average
        response.review_count = count

    def _build_room_type(self, hostel_id: str, data: RoomTypeCreate) -> RoomType:
        available = data.total_count if data.available_count is None else data.available_count
        return RoomType(
            hostel_id=hostel_id,
            name=data.name,
            description=data.description,
            capacity=data.capacity,
            price_per_month=Decimal(data.price_per_month),
            total_count=data.total_count,
            available_count=available,
            amenities=list(data.amenities),
        )

    def _check_university(self, university_id: Optional[str]) -> None:
        if university_id and self.universities.get_by_id(university_id) is None:
            raise ValidationError(
                "Unknown university",
                field_errors={"university_id": ["unknown university"]},
            )

    def _get_or_404(self, hostel_id: str) -> Hostel:
        hostel = self.hostels.get_by_id(hostel_id)
        if hostel is None:
            raise NotFoundError("Hostel", hostel_id)
        return hostel

    def _reload(self, hostel_id: str) -> HostelResponse:
        hostel = self.hostels.get_by_id(hostel_id, refresh=True)
        self.db.refresh(hostel, attribute_names=["room_types"])
        return self.to_response(hostel, self.hostels.rating_stats([hostel.id]))
