"""
Student schemas.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import Field

from campus_housing.schemas.base import BaseSchema, UUIDMixin

__all__ = [
    "StudentResponse",
    "StudentCreate",
    "ReleaseRequest",
    "AssignmentStatusResponse",
]


class StudentResponse(BaseSchema, UUIDMixin):
    first_name: str
    last_name: str
    username: str
    room_id: Optional[str] = None


class StudentCreate(BaseSchema):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=1, max_length=64)


class ReleaseRequest(BaseSchema):
    student_id: UUID


class AssignmentStatusResponse(BaseSchema):
    username: str
    assigned: bool
    room_id: Optional[str] = None
