"""
Dorm response schemas.
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from campus_housing.schemas.base import BaseSchema, UUIDMixin
from campus_housing.schemas.room import RoomResponse

__all__ = ["DormResponse", "DormDetailResponse"]


class DormResponse(BaseSchema, UUIDMixin):
    name: str
    address: str


class DormDetailResponse(DormResponse):
    """Dorm together with all of its rooms ordered by number."""

    rooms: List[RoomResponse] = Field(default_factory=list)
