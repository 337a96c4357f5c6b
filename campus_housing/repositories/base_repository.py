"""
Base repository with common CRUD operations and utilities.

Repositories never commit: they add, mutate and flush inside the
session owned by the caller's unit of work.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from campus_housing.models.base import BaseModel

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.

    Features:
    - Point lookups with optional row locking
    - Creation with flush to obtain generated values
    - Counting
    """

    def __init__(self, model: Type[T], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    # ============================================================================
    # CREATE OPERATIONS
    # ============================================================================

    def create(self, data: Dict[str, Any]) -> T:
        """
        Create a new entity and flush it so defaults are populated.

        Raises:
            IntegrityError: If unique constraint violated
        """
        entity = self.model(**data)
        self.session.add(entity)
        self.session.flush()
        return entity

    # ============================================================================
    # READ OPERATIONS
    # ============================================================================

    def get(self, entity_id: str, lock_for_update: bool = False) -> Optional[T]:
        """
        Get entity by ID.

        Args:
            entity_id: Primary key
            lock_for_update: Lock the row until the transaction ends

        Returns:
            Entity if found, None otherwise
        """
        stmt = select(self.model).where(self.model.id == str(entity_id))
        if lock_for_update:
            stmt = stmt.with_for_update()
            # Re-read the row so a stale identity-map copy is not returned
            stmt = stmt.execution_options(populate_existing=True)
        return self.session.execute(stmt).scalar_one_or_none()

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.model)
        return self.session.execute(stmt).scalar_one()
