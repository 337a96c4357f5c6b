"""
Room schemas and the room assignment request.
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import Field, model_validator

from campus_housing.schemas.base import BaseSchema, UUIDMixin
from campus_housing.schemas.student import StudentResponse

__all__ = [
    "RoomResponse",
    "RoomDetailResponse",
    "AssignRoomRequest",
]


class RoomResponse(BaseSchema, UUIDMixin):
    number: str
    capacity: int
    is_free: bool
    dorm_id: str = Field(..., alias="domId")


class RoomDetailResponse(RoomResponse):
    """Room with its current occupants."""

    occupant_count: int = 0
    students: List[StudentResponse] = Field(default_factory=list)


class AssignRoomRequest(BaseSchema):
    """
    Assign a student to a room.

    The student is identified either by ``username`` alone (an existing
    student) or by ``firstName`` and ``lastName`` with an optional
    ``username`` (a new student).
    """

    dorm_id: UUID = Field(..., alias="domId")
    room_number: str = Field(..., min_length=1, max_length=20)
    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)

    @model_validator(mode="after")
    def check_student_identity(self) -> "AssignRoomRequest":
        has_first = self.first_name is not None
        has_last = self.last_name is not None
        if has_first != has_last:
            raise ValueError("firstName and lastName must be given together")
        if not has_first and self.username is None:
            raise ValueError("either username or firstName and lastName is required")
        return self
