"""
University schemas.
"""

from __future__ import annotations

from typing import Optional

from unistay.schemas.common import BaseSchema

__all__ = ["UniversitySummary", "UniversityResponse"]


class UniversitySummary(BaseSchema):
    id: str
    name: str
    short_code: str


class UniversityResponse(UniversitySummary):
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    logo_url: Optional[str] = None
    hostel_count: int = 0
