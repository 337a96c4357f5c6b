"""
Room endpoints, including room assignment.

Static paths are declared before ``/{room_id}`` so they are matched first.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Query, status

from campus_housing.api.deps import AssignmentServiceDep, DormServiceDep, StudentServiceDep
from campus_housing.schemas.room import AssignRoomRequest, RoomDetailResponse, RoomResponse
from campus_housing.schemas.student import AssignmentStatusResponse, StudentResponse

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.post(
    "/assign",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_room(payload: AssignRoomRequest, service: AssignmentServiceDep) -> StudentResponse:
    """Assign an existing or new student to a room of a dorm."""
    return service.assign(payload)


@router.get("/free", response_model=List[RoomResponse])
def list_free_rooms(
    service: DormServiceDep,
    dorm_id: UUID = Query(..., alias="domId"),
) -> List[RoomResponse]:
    return service.list_free_rooms(dorm_id)


@router.get("/check-student/{username}", response_model=AssignmentStatusResponse)
def check_student(username: str, service: StudentServiceDep) -> AssignmentStatusResponse:
    return service.get_assignment_status(username)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: UUID, service: DormServiceDep) -> RoomResponse:
    return service.get_room(room_id)


@router.get("/{room_id}/detail", response_model=RoomDetailResponse)
def get_room_detail(room_id: UUID, service: DormServiceDep) -> RoomDetailResponse:
    return service.get_room_detail(room_id)
