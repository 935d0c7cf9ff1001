"""
Base repository with standardized CRUD helpers over a SQLAlchemy session.

Repositories never commit: they add and flush inside the caller's unit of
work. Commit, rollback and retry policy belong to the service layer.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from unistay.config.logging import get_logger
from unistay.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Provides lookups, creation, partial updates and pagination for all
    domain repositories.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: str, *, refresh: bool = False) -> Optional[ModelType]:
        """
        Fetch an entity by primary key.

        Args:
            entity_id: Primary key
            refresh: Re-read the row even if the session already holds it
        """
        if refresh:
            return self.db.get(self.model, entity_id, populate_existing=True)
        return self.db.get(self.model, entity_id)

    def count(self, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        return int(self.db.scalar(stmt) or 0)

    def paginate(self, stmt: Select, offset: int, limit: int) -> Tuple[List[ModelType], int]:
        """
        Run ``stmt`` for one page and count the full result set.

        Returns:
            (items, total)
        """
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int(self.db.scalar(count_stmt) or 0)
        items = list(self.db.scalars(stmt.offset(offset).limit(limit)).unique())
        return items, total

    @staticmethod
    def text_match(search: str, *columns: Any):
        """Case-insensitive substring match of ``search`` against any of ``columns``."""
        escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        return or_(*(func.lower(column).like(pattern, escape="\\") for column in columns))

    # ==================== Write Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """Add ``entity`` to the unit of work and flush to assign defaults."""
        self.db.add(entity)
        self.db.flush()
        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    def update_fields(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply a partial update.

        Args:
            entity: Loaded entity
            data: Field -> value; unknown fields are ignored
        """
        for field, value in data.items():
            if hasattr(entity, field):
                setattr(entity, field, value)
        self.db.flush()
        logger.debug(f"Updated {self.model.__name__} {entity.id}: {sorted(data)}")
        return entity
