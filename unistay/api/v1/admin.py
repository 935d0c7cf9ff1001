"""
Admin endpoints. Role checks happen in ``AdminService``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from unistay.api.deps import get_current_principal, get_db
from unistay.core.permissions import Principal
from unistay.core.rate_limiting import rate_limit
from unistay.models.enums import BookingStatus, UserRole
from unistay.schemas.admin import PlatformStats
from unistay.schemas.booking import BookingResponse
from unistay.schemas.common import PaginatedResponse
from unistay.schemas.hostel import HostelResponse
from unistay.schemas.user import UserModerationUpdate, UserResponse
from unistay.services.admin_service import AdminService

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(rate_limit())])


@router.get("/stats", response_model=PlatformStats)
def get_stats(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> PlatformStats:
    return AdminService(db).get_stats(principal)


@router.get("/users", response_model=PaginatedResponse[UserResponse])
def list_users(
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return AdminService(db).list_users(principal, role=role, search=search, page=page, limit=limit)


@router.put("/users/{user_id}", response_model=UserResponse)
def moderate_user(
    user_id: str,
    payload: UserModerationUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Verify, unverify, activate or deactivate an account."""
    return AdminService(db).moderate_user(principal, user_id, payload)


@router.get("/hostels", response_model=PaginatedResponse[HostelResponse])
def list_hostels(
    search: Optional[str] = Query(None, max_length=200),
    is_active: Optional[bool] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return AdminService(db).list_hostels(principal, search=search, is_active=is_active, page=page, limit=limit)


@router.get("/bookings", response_model=PaginatedResponse[BookingResponse])
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
):
    return AdminService(db).list_bookings(principal, status=status_filter, search=search, page=page, limit=limit)
