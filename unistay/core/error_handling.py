"""
Exception handlers that translate errors into the JSON error envelope.

Every failure leaves the API as::

    {"error": {"code": ..., "message": ..., "details": {...}}, "request_id": ...}
"""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from unistay.config.logging import get_logger
from unistay.core.exceptions import AppException, ErrorCode, RateLimitExceeded

logger = get_logger(__name__)


def _envelope(
    request: Request,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
        },
        "request_id": getattr(request.state, "request_id", None),
    }


async def handle_application_exception(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions"""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exc.error_code.value} - {exc.message}",
        extra={
            "error_code": exc.error_code.value,
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
        }
    )

    payload = exc.to_dict()
    payload["request_id"] = getattr(request.state, "request_id", None)

    headers = None
    if isinstance(exc, RateLimitExceeded):
        headers = {
            "Retry-After": str(exc.retry_after),
            "X-RateLimit-Limit": str(exc.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(exc.reset_at),
        }

    return JSONResponse(status_code=exc.status_code, content=payload, headers=headers)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors raised while parsing the request"""
    field_errors: Dict[str, list] = {}
    for error in exc.errors():
        # drop the leading "body"/"query" segment
        loc = [str(part) for part in error.get("loc", ())[1:]] or [str(p) for p in error.get("loc", ())]
        field_errors.setdefault(".".join(loc), []).append(error.get("msg", "Invalid value"))

    logger.info(
        f"Validation error: {len(field_errors)} field(s) failed validation",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            request,
            ErrorCode.VALIDATION_ERROR.value,
            "Request validation failed",
            {"field_errors": field_errors},
        ),
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database exceptions that escaped the service layer"""
    logger.error(
        f"Database exception: {type(exc).__name__}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(request, ErrorCode.INTERNAL_ERROR.value, "Database operation failed"),
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    logger.critical(
        f"Unexpected exception: {type(exc).__name__} - {str(exc)}",
        extra={"path": request.url.path, "method": request.method},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(request, ErrorCode.INTERNAL_ERROR.value, "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to ``app``."""
    app.add_exception_handler(AppException, handle_application_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)


__all__ = ["register_exception_handlers"]
