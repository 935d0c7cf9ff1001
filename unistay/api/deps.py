"""
FastAPI Dependencies

Dependency functions for database sessions, principal resolution and
the rate limiter. Routes receive collaborators through ``Depends`` only.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from unistay.config.logging import get_logger
from unistay.config.redis import get_redis_client
from unistay.config.settings import settings
from unistay.core.exceptions import AuthenticationError, ErrorCode
from unistay.core.permissions import Principal
from unistay.core.rate_limiting import RateLimiter
from unistay.core.security import decode_access_token
from unistay.db.session import get_db
from unistay.repositories.user_repository import UserRepository

logger = get_logger(__name__)

# auto_error=False so a missing header becomes our 401 envelope rather than FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> Principal:
    """
    Resolve the bearer token into a Principal.

    The role is read from the stored user, not from token claims, so role
    changes and deactivation take effect immediately.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    payload = decode_access_token(credentials.credentials)
    user = UserRepository(db).get_by_id(str(payload["sub"]))
    if user is None or not user.is_active:
        raise AuthenticationError(
            "User not found or inactive",
            error_code=ErrorCode.AUTHENTICATION_FAILED,
        )

    request.state.user_id = user.id
    return Principal(user_id=user.id, role=user.role)


@lru_cache()
def _build_rate_limiter() -> RateLimiter:
    return RateLimiter(get_redis_client(), settings.RATE_LIMIT_RULES)


def get_rate_limiter() -> Optional[RateLimiter]:
    """Shared limiter, or None when rate limiting is switched off."""
    if not settings.RATE_LIMIT_ENABLED:
        return None
    return _build_rate_limiter()
