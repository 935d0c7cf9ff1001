# unistay/db/init_db.py
"""Database initialization utilities."""
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from unistay.config.logging import get_logger
from unistay.db.base import Base

logger = get_logger(__name__)


def _resolve_engine(bind: Optional[Engine]) -> Engine:
    if bind is not None:
        return bind
    from unistay.db.session import engine
    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Note: This is suitable for development/testing only.
    Production deployments manage the schema with migrations.
    """
    bind = _resolve_engine(bind)
    try:
        existing_tables = inspect(bind).get_table_names()
        Base.metadata.create_all(bind=bind)
        logger.info(
            f"Database initialized ({len(Base.metadata.tables)} tables, "
            f"{len(existing_tables)} pre-existing)"
        )
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def drop_db(bind: Optional[Engine] = None) -> None:
    """
    Drop all database tables.

    WARNING: This will delete all data! Only for development/testing purposes.
    """
    bind = _resolve_engine(bind)
    try:
        Base.metadata.drop_all(bind=bind)
        logger.warning("All database tables dropped")
    except Exception as e:
        logger.error(f"Error dropping database: {e}")
        raise
