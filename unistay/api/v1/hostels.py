"""
Hostel catalogue endpoints.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from unistay.api.deps import get_current_principal, get_db
from unistay.core.permissions import Principal
from unistay.core.rate_limiting import rate_limit
from unistay.schemas.common import PaginatedResponse
from unistay.schemas.hostel import (
    HostelCreate,
    HostelDetailResponse,
    HostelResponse,
    HostelSearchParams,
    HostelUpdate,
)
from unistay.schemas.room_type import RoomTypeCreate, RoomTypeResponse
from unistay.services.hostel_service import HostelService

router = APIRouter(prefix="/hostels", tags=["Hostels"])


@router.get(
    "",
    response_model=PaginatedResponse[HostelResponse],
    dependencies=[Depends(rate_limit())],
)
def search_hostels(
    search: Optional[str] = Query(None, max_length=200),
    university_id: Optional[str] = Query(None),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """Public search over active hostels."""
    filters = HostelSearchParams(
        search=search,
        university_id=university_id,
        min_price=min_price,
        max_price=max_price,
    )
    return HostelService(db).search(filters, page=page, limit=limit)


@router.get(
    "/{hostel_id}",
    response_model=HostelDetailResponse,
    dependencies=[Depends(rate_limit())],
)
def get_hostel(hostel_id: str, db: Session = Depends(get_db)) -> HostelDetailResponse:
    return HostelService(db).get_public_detail(hostel_id)


@router.post(
    "",
    response_model=HostelResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("write"))],
)
def create_hostel(
    payload: HostelCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> HostelResponse:
    return HostelService(db).create_hostel(principal, payload)


@router.put(
    "/{hostel_id}",
    response_model=HostelResponse,
    dependencies=[Depends(rate_limit("write"))],
)
def update_hostel(
    hostel_id: str,
    payload: HostelUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> HostelResponse:
    return HostelService(db).update_hostel(principal, hostel_id, payload)


@router.delete(
    "/{hostel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(rate_limit("write"))],
)
def delete_hostel(
    hostel_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> Response:
    """Soft delete: the listing is deactivated, never removed."""
    HostelService(db).deactivate_hostel(principal, hostel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{hostel_id}/room-types",
    response_model=RoomTypeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit("write"))],
)
def add_room_type(
    hostel_id: str,
    payload: RoomTypeCreate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> RoomTypeResponse:
    return HostelService(db).add_room_type(principal, hostel_id, payload)
