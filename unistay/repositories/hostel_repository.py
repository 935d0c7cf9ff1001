"""
Hostel repository: public search, rating aggregates and admin listing.
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import and_, exists, func, select
from sqlalchemy.orm import Session, selectinload

from unistay.models.hostel import Hostel
from unistay.models.review import Review
from unistay.models.room_type import RoomType
from unistay.models.user import User
from unistay.repositories.base_repository import BaseRepository

RatingStats = Tuple[Optional[float], int]


class HostelRepository(BaseRepository[Hostel]):

    def __init__(self, db: Session):
        super().__init__(Hostel, db)

    # ==================== Lookups ====================

    def get_active(self, hostel_id: str) -> Optional[Hostel]:
        return self.db.scalar(
            select(Hostel)
            .where(Hostel.id == hostel_id, Hostel.is_active.is_(True))
            .options(selectinload(Hostel.room_types), selectinload(Hostel.owner))
        )

    # ==================== Search ====================

    def search_public(
        self,
        *,
        search: Optional[str] = None,
        university_id: Optional[str] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Hostel], int]:
        """
        Active hostels of verified owners matching the filters.

        Price bounds match a hostel when at least one of its room types is
        priced within them.
        """
        stmt = (
            select(Hostel)
            .join(User, User.id == Hostel.owner_id)
            .where(Hostel.is_active.is_(True), User.is_verified.is_(True))
        )
        if search:
            stmt = stmt.where(self._hostel_text_match(search))
        if university_id:
            stmt = stmt.where(Hostel.university_id == university_id)
        if min_price is not None or max_price is not None:
            price_conditions = [RoomType.hostel_id == Hostel.id]
            if min_price is not None:
                price_conditions.append(RoomType.price_per_month >= min_price)
            if max_price is not None:
                price_conditions.append(RoomType.price_per_month <= max_price)
            stmt = stmt.where(exists().where(and_(*price_conditions)))

        stmt = stmt.options(
            selectinload(Hostel.room_types),
            selectinload(Hostel.owner),
            selectinload(Hostel.university),
        ).order_by(Hostel.created_at.desc(), Hostel.id)
        return self.paginate(stmt, offset, limit)

    def search_all(
        self,
        *,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        offset: int = 0,
        limit: int = 50,
    ) -> Tuple[List[Hostel], int]:
        """Admin listing, regardless of activity unless ``is_active`` is given."""
        stmt = select(Hostel)
        if search:
            stmt = stmt.where(self._hostel_text_match(search))
        if is_active is not None:
            stmt = stmt.where(Hostel.is_active.is_(is_active))
        stmt = stmt.options(
            selectinload(Hostel.room_types),
            selectinload(Hostel.owner),
        ).order_by(Hostel.created_at.desc(), Hostel.id)
        return self.paginate(stmt, offset, limit)

    # ==================== Ratings ====================

    def rating_stats(self, hostel_ids: Iterable[str]) -> Dict[str, RatingStats]:
        """Map hostel id -> (average rating, review count)."""
        ids = list(hostel_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(Review.hostel_id, func.avg(Review.rating), func.count(Review.id))
            .where(Review.hostel_id.in_(ids))
            .group_by(Review.hostel_id)
        ).all()
        stats: Dict[str, RatingStats] = {hostel_id: (None, 0) for hostel_id in ids}
        for hostel_id, avg, count in rows:
            stats[hostel_id] = (round(float(avg), 2) if avg is not None else None, int(count))
        return stats

    def _hostel_text_match(self, search: str):
        return self.text_match(search, Hostel.name, func.coalesce(Hostel.description, ""), Hostel.address)
