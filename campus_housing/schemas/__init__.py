"""Request and response schemas of the housing API."""

from campus_housing.schemas.base import BaseSchema, StatusResponse
from campus_housing.schemas.dorm import DormDetailResponse, DormResponse
from campus_housing.schemas.room import AssignRoomRequest, RoomDetailResponse, RoomResponse
from campus_housing.schemas.student import (
    AssignmentStatusResponse,
    ReleaseRequest,
    StudentCreate,
    StudentResponse,
)
from campus_housing.schemas.student_card import (
    BalanceAdjustment,
    StudentCardCreate,
    StudentCardResponse,
)

__all__ = [
    "BaseSchema",
    "StatusResponse",
    "DormDetailResponse",
    "DormResponse",
    "AssignRoomRequest",
    "RoomDetailResponse",
    "RoomResponse",
    "AssignmentStatusResponse",
    "ReleaseRequest",
    "StudentCreate",
    "StudentResponse",
    "BalanceAdjustment",
    "StudentCardCreate",
    "StudentCardResponse",
]
