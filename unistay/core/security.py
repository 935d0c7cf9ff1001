"""
Bearer token handling.

Tokens are issued by the external identity provider and signed with the
shared ``JWT_SECRET_KEY``. This module only decodes them into claims;
``create_access_token`` exists for service-to-service calls and tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from unistay.config.logging import get_logger
from unistay.config.settings import settings
from unistay.core.exceptions import AuthenticationError, ErrorCode

logger = get_logger(__name__)


def create_access_token(
    subject: str,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Create a signed access token.

    Args:
        subject: User id placed in the ``sub`` claim
        role: Optional role claim (informational; the stored role wins)
        expires_delta: Lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES
        extra_claims: Additional claims to embed

    Returns:
        Encoded JWT string
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode: Dict[str, Any] = {"sub": subject, "exp": expire, "type": "access"}
    if role:
        to_encode["role"] = role
    if extra_claims:
        to_encode.update(extra_claims)
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        AuthenticationError: If the token is expired, malformed or lacks a subject
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired", error_code=ErrorCode.TOKEN_INVALID)
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        raise AuthenticationError("Invalid authentication token", error_code=ErrorCode.TOKEN_INVALID)

    if not payload.get("sub"):
        raise AuthenticationError("Token is missing a subject", error_code=ErrorCode.TOKEN_INVALID)
    return payload
