"""
Custom Exceptions for the UniStay marketplace

This module defines the exception hierarchy raised by services and
translated into HTTP error envelopes at the API boundary.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    TOKEN_INVALID = "TOKEN_INVALID"
    FORBIDDEN = "FORBIDDEN"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    INVALID_ROOM_TYPE = "INVALID_ROOM_TYPE"

    # Business logic errors
    CONFLICT = "CONFLICT"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    NO_ROOMS_AVAILABLE = "NO_ROOMS_AVAILABLE"
    CONCURRENT_UPDATE = "CONCURRENT_UPDATE"
    TRANSACTION_RETRY_EXHAUSTED = "TRANSACTION_RETRY_EXHAUSTED"
    ALREADY_REVIEWED = "ALREADY_REVIEWED"

    # Throttling
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


class AppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    status_code: int = 500
    default_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "details": self.details,
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class ValidationError(AppException):
    """Raised when request data fails business validation"""

    status_code = 400
    default_code = ErrorCode.VALIDATION_ERROR
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[ErrorCode] = None,
        field_errors: Optional[Dict[str, List[str]]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = dict(details or {})
        if field_errors:
            details["field_errors"] = field_errors
        super().__init__(message, error_code, details)


class AuthenticationError(AppException):
    """Raised when the caller has no valid principal"""

    status_code = 401
    default_code = ErrorCode.AUTHENTICATION_FAILED
    default_message = "Authentication required"


class AuthorizationError(AppException):
    """Raised when a valid principal lacks the role or relationship required"""

    status_code = 403
    default_code = ErrorCode.FORBIDDEN
    default_message = "You do not have permission to perform this action"


class NotFoundError(AppException):
    """Raised when a requested resource is not found"""

    status_code = 404
    default_code = ErrorCode.NOT_FOUND

    def __init__(self, resource_type: str = "Resource", resource_id: Optional[str] = None):
        message = f"{resource_type} not found"
        if resource_id:
            message += f" (ID: {resource_id})"
        super().__init__(
            message,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(AppException):
    """Raised when a request conflicts with current state"""

    status_code = 409
    default_code = ErrorCode.CONFLICT
    default_message = "Request conflicts with the current state of the resource"


class RateLimitExceeded(AppException):
    """Raised when a client exceeds its request budget"""

    status_code = 429
    default_code = ErrorCode.RATE_LIMIT_EXCEEDED
    default_message = "Too many requests"

    def __init__(self, retry_after: int, limit: int, reset_at: int, message: Optional[str] = None):
        super().__init__(
            message,
            details={"retry_after": retry_after, "limit": limit, "reset_at": reset_at},
        )
        self.retry_after = retry_after
        self.limit = limit
        self.reset_at = reset_at


__all__ = [
    "ErrorCode",
    "AppException",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitExceeded",
]
