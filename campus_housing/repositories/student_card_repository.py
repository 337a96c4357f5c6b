"""
Student card repository.

Balance changes are applied as a single conditional ``UPDATE`` so that
concurrent adjustments never interleave into a negative balance.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from campus_housing.models.student_card import StudentCard
from campus_housing.repositories.base_repository import BaseRepository


class StudentCardRepository(BaseRepository[StudentCard]):
    """Repository for student meal cards."""

    def __init__(self, session: Session):
        super().__init__(StudentCard, session)

    def get_by_student(self, student_id: str) -> Optional[StudentCard]:
        stmt = (
            select(StudentCard)
            .where(StudentCard.student_id == str(student_id))
            .execution_options(populate_existing=True)
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def create_for_student(self, student_id: str) -> StudentCard:
        """
        Create a card with a zero balance.

        Raises:
            IntegrityError: If the student already has a card
        """
        return self.create({"student_id": str(student_id), "balance": Decimal("0.00")})

    def adjust_balance(self, student_id: str, delta: Decimal) -> bool:
        """
        Add ``delta`` to the balance unless the result would be negative.

        Returns:
            True if a row was updated
        """
        result = self.session.execute(
            update(StudentCard)
            .where(
                StudentCard.student_id == str(student_id),
                StudentCard.balance + delta >= 0,
            )
            .values(balance=StudentCard.balance + delta)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
