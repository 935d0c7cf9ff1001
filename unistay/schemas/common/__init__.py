from unistay.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseSchema,
    BaseUpdateSchema,
    TimestampMixin,
    UUIDMixin,
)
from unistay.schemas.common.pagination import (
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
)

__all__ = [
    "BaseSchema",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "TimestampMixin",
    "UUIDMixin",
    "PaginationParams",
    "PaginationMeta",
    "PaginatedResponse",
]
