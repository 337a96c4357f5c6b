"""
Dorm and room read service.
"""
from __future__ import annotations

from typing import Callable, List
from uuid import UUID

from sqlalchemy.orm import Session

from campus_housing.repositories.dorm_repository import DormRepository
from campus_housing.repositories.room_repository import RoomRepository
from campus_housing.repositories.student_repository import StudentRepository
from campus_housing.schemas.dorm import DormDetailResponse, DormResponse
from campus_housing.schemas.room import RoomDetailResponse, RoomResponse
from campus_housing.schemas.student import StudentResponse
from campus_housing.services.common import NotFoundError, RoomNotFoundError, UnitOfWork


class DormService:
    """
    Read access to dorms and rooms.

    None of these reads lock rows; free flags may be stale by the time a
    client acts on them.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def list_dorms(self) -> List[DormResponse]:
        with UnitOfWork(self._session_factory) as uow:
            dorms = uow.get_repo(DormRepository).list_dorms()
            return [DormResponse.model_validate(d) for d in dorms]

    def get_dorm(self, dorm_id: UUID | str) -> DormDetailResponse:
        with UnitOfWork(self._session_factory) as uow:
            dorm = uow.get_repo(DormRepository).get(str(dorm_id))
            if dorm is None:
                raise NotFoundError("Dorm", dorm_id)
            rooms = uow.get_repo(RoomRepository).list_by_dorm(dorm.id)
            return DormDetailResponse(
                id=dorm.id,
                name=dorm.name,
                address=dorm.address,
                rooms=[RoomResponse.model_validate(r) for r in rooms],
            )

    def list_free_rooms(self, dorm_id: UUID | str) -> List[RoomResponse]:
        """Free rooms of a dorm ordered by number; empty for unknown dorms."""
        with UnitOfWork(self._session_factory) as uow:
            rooms = uow.get_repo(RoomRepository).list_free(str(dorm_id))
            return [RoomResponse.model_validate(r) for r in rooms]

    def get_room(self, room_id: UUID | str) -> RoomResponse:
        with UnitOfWork(self._session_factory) as uow:
            room = uow.get_repo(RoomRepository).get(str(room_id))
            if room is None:
                raise RoomNotFoundError(room_id)
            return RoomResponse.model_validate(room)

    def get_room_detail(self, room_id: UUID | str) -> RoomDetailResponse:
        """Room with its occupants, read in one transaction."""
        with UnitOfWork(self._session_factory) as uow:
            room = uow.get_repo(RoomRepository).get(str(room_id))
            if room is None:
                raise RoomNotFoundError(room_id)
            occupants = uow.get_repo(StudentRepository).list_by_room(room.id)

            detail = RoomDetailResponse.model_validate(room)
            detail.students = [StudentResponse.model_validate(s) for s in occupants]
            detail.occupant_count = len(occupants)
            return detail
