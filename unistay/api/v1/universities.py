"""
University endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unistay.api.deps import get_db
from unistay.core.rate_limiting import rate_limit
from unistay.schemas.university import UniversityResponse
from unistay.services.university_service import UniversityService

router = APIRouter(prefix="/universities", tags=["Universities"])


@router.get("", response_model=List[UniversityResponse], dependencies=[Depends(rate_limit())])
def list_universities(db: Session = Depends(get_db)) -> List[UniversityResponse]:
    return UniversityService(db).list_universities()
