"""
Student meal card model.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from campus_housing.models.base import BaseModel


class StudentCard(BaseModel):
    """Prepaid card with a non-negative balance; one per student."""

    __tablename__ = "student_cards"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_student_cards_balance_non_negative"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    balance: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
    )

    def __repr__(self) -> str:
        return f"<StudentCard(id={self.id}, student_id={self.student_id}, balance={self.balance})>"
