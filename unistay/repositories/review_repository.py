"""
Review repository.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from unistay.models.review import Review
from unistay.repositories.base_repository import BaseRepository


class ReviewRepository(BaseRepository[Review]):

    def __init__(self, db: Session):
        super().__init__(Review, db)

    def get_for_student_and_hostel(self, student_id: str, hostel_id: str) -> Optional[Review]:
        return self.db.scalar(
            select(Review).where(Review.student_id == student_id, Review.hostel_id == hostel_id)
        )

    def search(
        self,
        *,
        hostel_id: Optional[str] = None,
        student_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Review], int]:
        stmt = select(Review).options(selectinload(Review.student))
        if hostel_id:
            stmt = stmt.where(Review.hostel_id == hostel_id)
        if student_id:
            stmt = stmt.where(Review.student_id == student_id)
        stmt = stmt.order_by(Review.created_at.desc(), Review.id)
        return self.paginate(stmt, offset, limit)

    def latest_for_hostel(self, hostel_id: str, limit: int = 10) -> List[Review]:
        return list(
            self.db.scalars(
                select(Review)
                .where(Review.hostel_id == hostel_id)
                .options(selectinload(Review.student))
                .order_by(Review.created_at.desc(), Review.id)
                .limit(limit)
            )
        )

    def average_rating(self) -> Optional[float]:
        avg = self.db.scalar(select(func.avg(Review.rating)))
        return round(float(avg), 2) if avg is not None else None
