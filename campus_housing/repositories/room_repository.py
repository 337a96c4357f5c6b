"""
Room repository.

Locked lookups issue ``SELECT ... FOR UPDATE``; the lock is held until
the enclosing unit of work commits or rolls back.
"""

from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from campus_housing.models.room import Room
from campus_housing.repositories.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """Repository for rooms."""

    def __init__(self, session: Session):
        super().__init__(Room, session)

    def get_by_number(
        self,
        dorm_id: str,
        number: str,
        lock_for_update: bool = False,
    ) -> Optional[Room]:
        """
        Get a room by its number within a dorm.

        Args:
            dorm_id: Owning dorm
            number: Room number
            lock_for_update: Lock the row until the transaction ends

        Returns:
            Room if found, None otherwise
        """
        stmt = select(Room).where(Room.dorm_id == str(dorm_id), Room.number == number)
        if lock_for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.session.execute(stmt).scalar_one_or_none()

    def set_free(self, room_id: str, is_free: bool) -> bool:
        """
        Set the free flag of a room.

        Returns:
            False if the room does not exist
        """
        result = self.session.execute(
            update(Room)
            .where(Room.id == str(room_id))
            .values(is_free=is_free)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount > 0

    def list_free(self, dorm_id: str) -> List[Room]:
        """Free rooms of a dorm ordered by room number."""
        stmt = (
            select(Room)
            .where(Room.dorm_id == str(dorm_id), Room.is_free.is_(True))
            .order_by(Room.number)
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_by_dorm(self, dorm_id: str) -> List[Room]:
        stmt = select(Room).where(Room.dorm_id == str(dorm_id)).order_by(Room.number)
        return list(self.session.execute(stmt).scalars().all())
