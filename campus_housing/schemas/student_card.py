"""
Student card schemas.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from campus_housing.schemas.base import BaseSchema, UUIDMixin

__all__ = [
    "StudentCardResponse",
    "StudentCardCreate",
    "BalanceAdjustment",
]


class StudentCardResponse(BaseSchema, UUIDMixin):
    student_id: str
    student_username: str
    balance: float


class StudentCardCreate(BaseSchema):
    student_username: str = Field(..., min_length=1, max_length=64)


class BalanceAdjustment(BaseSchema):
    """Signed change of a card balance."""

    student_username: str = Field(..., min_length=1, max_length=64)
    delta: Decimal = Field(..., max_digits=12, decimal_places=2)
