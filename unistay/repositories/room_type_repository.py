"""
Room type repository, including the conditional inventory updates.

``available_count`` is only ever moved by the two guarded UPDATE
statements below; each touches at most one row and reports whether it
did. The guard is evaluated by the database, so concurrent callers cannot
push the count outside ``0..total_count``.
"""

from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from unistay.config.logging import get_logger
from unistay.models.room_type import RoomType
from unistay.repositories.base_repository import BaseRepository

logger = get_logger(__name__)


class RoomTypeRepository(BaseRepository[RoomType]):

    def __init__(self, db: Session):
        super().__init__(RoomType, db)

    # ==================== Lookups ====================

    def get_for_hostel(self, room_type_id: str, hostel_id: str) -> Optional[RoomType]:
        """Return the room type only if it belongs to ``hostel_id``."""
        return self.db.scalar(
            select(RoomType).where(RoomType.id == room_type_id, RoomType.hostel_id == hostel_id)
        )

    # ==================== Inventory ====================

    def try_reserve_unit(self, room_type_id: str) -> bool:
        """
        Decrement ``available_count`` by one if a unit is free.

        Returns:
            True if a unit was reserved, False if none was available
        """
        result = self.db.execute(
            update(RoomType)
            .where(RoomType.id == room_type_id, RoomType.available_count > 0)
            .values(available_count=RoomType.available_count - 1)
            .execution_options(synchronize_session=False)
        )
        reserved = result.rowcount == 1
        if reserved:
            self.get_by_id(room_type_id, refresh=True)
        logger.debug(f"Reserve unit on room type {room_type_id}: {'ok' if reserved else 'none free'}")
        return reserved

    def release_unit(self, room_type_id: str) -> bool:
        """
        Increment ``available_count`` by one unless already at ``total_count``.

        Returns:
            True if a unit was released
        """
        result = self.db.execute(
            update(RoomType)
            .where(RoomType.id == room_type_id, RoomType.available_count < RoomType.total_count)
            .values(available_count=RoomType.available_count + 1)
            .execution_options(synchronize_session=False)
        )
        released = result.rowcount == 1
        if released:
            self.get_by_id(room_type_id, refresh=True)
        return released
