"""Database session management."""
import time
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from unistay.config.logging import get_logger
from unistay.config.settings import settings

logger = get_logger(__name__)

SLOW_QUERY_SECONDS = 0.5


def build_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for ``url``.

    Pool sizing only applies to server databases; SQLite uses its own
    pool classes and rejects ``pool_size``.
    """
    options = {"pool_pre_ping": True, "echo": settings.DB_ECHO}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_OVERFLOW,
            pool_recycle=3600,
        )
    options.update(kwargs)
    return create_engine(url, **options)


engine = build_engine(settings.get_database_url())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Start the per-statement timer"""
    conn.info.setdefault('query_start_time', []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log slow queries"""
    total_time = time.time() - conn.info['query_start_time'].pop()

    if total_time > SLOW_QUERY_SECONDS:
        logger.warning(f"Slow query detected ({total_time:.4f}s): {statement[:100]}...")


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
