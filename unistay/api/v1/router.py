"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the marketplace
"""
from fastapi import APIRouter

from unistay.api.v1 import admin, bookings, hostels, reviews, universities, users

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        401: {"description": "Unauthorized"},
        403: {"description": "Forbidden"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        429: {"description": "Too Many Requests"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(bookings.router)
router.include_router(hostels.router)
router.include_router(reviews.router)
router.include_router(universities.router)
router.include_router(users.router)
router.include_router(admin.router)
