"""
Review schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from unistay.schemas.common import BaseCreateSchema, BaseDBSchema, BaseSchema

__all__ = ["ReviewCreate", "ReviewAuthor", "ReviewResponse"]


class ReviewCreate(BaseCreateSchema):
    hostel_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5, description="Star rating from 1 to 5")
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewAuthor(BaseSchema):
    id: str
    first_name: str
    last_name: str


class ReviewResponse(BaseDBSchema):
    student_id: str
    hostel_id: str
    rating: int
    comment: Optional[str] = None
    student: Optional[ReviewAuthor] = None
