"""
Dorm repository.
"""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_housing.models.dorm import Dorm
from campus_housing.repositories.base_repository import BaseRepository


class DormRepository(BaseRepository[Dorm]):
    """Read access to dorms."""

    def __init__(self, session: Session):
        super().__init__(Dorm, session)

    def list_dorms(self) -> List[Dorm]:
        stmt = select(Dorm).order_by(Dorm.name, Dorm.id)
        return list(self.session.execute(stmt).scalars().all())
