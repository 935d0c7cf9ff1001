"""
Profile endpoints for the authenticated user.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unistay.api.deps import get_current_principal, get_db
from unistay.core.permissions import Principal
from unistay.core.rate_limiting import rate_limit
from unistay.schemas.user import UserProfileResponse, UserProfileUpdate
from unistay.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserProfileResponse, dependencies=[Depends(rate_limit())])
def read_profile(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> UserProfileResponse:
    return UserService(db).get_profile(principal)


@router.put("/me", response_model=UserProfileResponse, dependencies=[Depends(rate_limit("write"))])
def update_profile(
    payload: UserProfileUpdate,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db),
) -> UserProfileResponse:
    return UserService(db).update_profile(principal, payload)
