from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from unistay import __version__
from unistay.api.v1.router import router as api_v1_router
from unistay.config.logging import get_logger, setup_logging
from unistay.config.redis import check_redis_connection
from unistay.config.settings import settings
from unistay.core.error_handling import register_exception_handlers
from unistay.core.middleware import register_middlewares
from unistay.db.init_db import init_db
from unistay.db.session import SessionLocal

logger = get_logger(__name__)


def check_database_connection() -> Dict[str, Any]:
    """Run a trivial query against the primary database."""
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "healthy", "error": None}
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        return {"status": "unhealthy", "error": str(e)}


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS Configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register shared core middlewares (request ID, timing, security headers)
    register_middlewares(app, enable_hsts=settings.is_production())
    register_exception_handlers(app)

    # Mount API v1 under /api/v1
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["System Health"])
    def health_check() -> Dict[str, Any]:
        """Liveness plus database and Redis reachability."""
        database = check_database_connection()
        redis = check_redis_connection() if settings.RATE_LIMIT_ENABLED else {"status": "disabled"}
        healthy = database["status"] == "healthy" and redis["status"] in ("healthy", "disabled")
        return {
            "status": "healthy" if healthy else "degraded",
            "version": __version__,
            "environment": settings.ENVIRONMENT,
            "database": database,
            "redis": redis,
        }

    # Schema creation for dev/demo only; production manages migrations
    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            init_db()

    return app


app = create_app()
