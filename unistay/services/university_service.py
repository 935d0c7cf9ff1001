"""
University listing.
"""

from typing import List

from sqlalchemy.orm import Session

from unistay.repositories.university_repository import UniversityRepository
from unistay.schemas.university import UniversityResponse
from unistay.services.base_service import BaseService


class UniversityService(BaseService):

    def __init__(self, db_session: Session, **kwargs):
        super().__init__(db_session, **kwargs)
        self.universities = UniversityRepository(db_session)

    def list_universities(self) -> List[UniversityResponse]:
        results = []
        for university, hostel_count in self.universities.list_active_with_hostel_counts():
            response = UniversityResponse.model_validate(university)
            response.hostel_count = hostel_count
            results.append(response)
        return results
