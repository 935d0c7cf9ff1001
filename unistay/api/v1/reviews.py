"""
Review endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from unistay.api.deps import get_current_principal, get_db
from unistay.core.permissions import Principal
from unistay.core.rate_limiting import rate_limit
from unistay.schemas.common import PaginatedResponse
from unistay.schemas.review import ReviewCreate, ReviewResponse
from unistay.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["Reviews"])


@router.get(
    "",
    response_model=PaginatedResponse[ReviewResponse],
    dependencies=[Depends(rate_limit())],
)
def list_reviews(
    hostel_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return ReviewService(db).list_reviews(hostel_id=hostel_id, student_id=student_id, page=page, limit=limit)


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("write"))],
)
def create_review(
    payload: ReviewCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> ReviewResponse:
    """Review a hostel the caller has stayed at."""
    return ReviewService(db).create_review(principal, payload)
