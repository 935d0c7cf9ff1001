"""
University repository.
"""

from typing import List, Tuple

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from unistay.models.hostel import Hostel
from unistay.models.university import University
from unistay.repositories.base_repository import BaseRepository


class UniversityRepository(BaseRepository[University]):

    def __init__(self, db: Session):
        super().__init__(University, db)

    def list_active_with_hostel_counts(self) -> List[Tuple[University, int]]:
        """Active universities ordered by name with their active hostel count."""
        stmt = (
            select(University, func.count(Hostel.id))
            .outerjoin(Hostel, and_(Hostel.university_id == University.id, Hostel.is_active.is_(True)))
            .where(University.is_active.is_(True))
            .group_by(University.id)
            .order_by(University.name)
        )
        return [(university, int(count)) for university, count in self.db.execute(stmt).all()]
