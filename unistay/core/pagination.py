# unistay/core/pagination.py
from __future__ import annotations

"""
Core pagination helpers.

This module provides:
- `normalize_pagination` to clean up page/limit inputs using defaults
  and clamping.
- `paginate_items` to map and wrap results in a `PaginatedResponse` schema.
"""

from typing import Callable, List, Sequence, TypeVar

from unistay.config.settings import settings
from unistay.schemas.common import BaseSchema, PaginatedResponse, PaginationParams

TModel = TypeVar("TModel")
TSchema = TypeVar("TSchema", bound=BaseSchema)

DEFAULT_PAGE = 1


def normalize_pagination(
    page: int | None,
    limit: int | None,
) -> PaginationParams:
    """
    Normalize raw page & limit inputs into a PaginationParams object
    with sane defaults and a clamped max page size.

    Rules:
        - page < 1 or None -> 1
        - limit < 1 or None -> DEFAULT_PAGE_SIZE
        - limit > MAX_PAGE_SIZE -> MAX_PAGE_SIZE
    """
    if page is None or page < 1:
        page = DEFAULT_PAGE

    if limit is None or limit < 1:
        limit = settings.DEFAULT_PAGE_SIZE

    if limit > settings.MAX_PAGE_SIZE:
        limit = settings.MAX_PAGE_SIZE

    return PaginationParams(page=page, limit=limit)


def paginate_items(
    *,
    items: Sequence[TModel],
    total: int,
    params: PaginationParams,
    mapper: Callable[[TModel], TSchema],
) -> PaginatedResponse[TSchema]:
    """
    Map and wrap items into a PaginatedResponse.

    Args:
        items: Rows for the current page.
        total: Total number of rows across all pages.
        params: Pagination parameters (page, limit).
        mapper: Converts each row into a schema instance.
    """
    mapped: List[TSchema] = [mapper(obj) for obj in items]
    return PaginatedResponse.create(
        items=mapped,
        total=total,
        page=params.page,
        limit=params.limit,
    )
