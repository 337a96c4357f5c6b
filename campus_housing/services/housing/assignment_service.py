"""
Room assignment service.

Assigns students to rooms under the room capacity and releases rooms
when students leave, keeping each room's free flag equal to
``occupant_count < capacity``.

Both operations lock the room row first and the student row second,
so concurrent assigns and releases on the same room serialize on the
room lock and never deadlock against each other. A lost lock race
surfaces as ``TransactionConflictError`` and the whole operation is
retried in a fresh transaction.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_housing.models.room import Room
from campus_housing.models.student import Student
from campus_housing.repositories.room_repository import RoomRepository
from campus_housing.repositories.student_repository import StudentRepository
from campus_housing.schemas.room import AssignRoomRequest
from campus_housing.schemas.student import StudentResponse
from campus_housing.services.common import (
    AlreadyExistsError,
    RoomFullError,
    RoomNotFoundError,
    StudentAlreadyAssignedError,
    StudentNotFoundError,
    TransactionConflictError,
    UnitOfWork,
    run_in_transaction,
)
from campus_housing.utils.slug_utils import UniqueUsernameGenerator

logger = logging.getLogger(__name__)


class RoomAssignmentService:
    """
    Coordinates room assignment and release transactions.

    - assign_student: lock room, check capacity, resolve student, assign
    - release_student: idempotent release with free flag recomputation
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        max_attempts: Optional[int] = None,
        backoff: Optional[float] = None,
    ) -> None:
        self._session_factory = session_factory
        self._max_attempts = max_attempts
        self._backoff = backoff

    def _run(self, work: Callable[[UnitOfWork], object]):
        return run_in_transaction(
            self._session_factory,
            work,
            max_attempts=self._max_attempts,
            backoff=self._backoff,
        )

    # -------------------------------------------------------------------------
    # Assign
    # -------------------------------------------------------------------------

    def assign(self, request: AssignRoomRequest) -> StudentResponse:
        """Assign the student described by an API request."""
        return self.assign_student(
            request.dorm_id,
            request.room_number,
            username=request.username,
            first_name=request.first_name,
            last_name=request.last_name,
        )

    def assign_student(
        self,
        dorm_id: UUID | str,
        room_number: str,
        *,
        username: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> StudentResponse:
        """
        Assign a student to room ``room_number`` of dorm ``dorm_id``.

        With only ``username`` the existing student is assigned. With
        ``first_name`` and ``last_name`` a new student is created first,
        using ``username`` when given or a generated one otherwise.

        Returns:
            The assigned student with ``room_id`` populated

        Raises:
            RoomNotFoundError: No such room in the dorm
            RoomFullError: The room already holds ``capacity`` students
            StudentNotFoundError: ``username`` does not exist
            StudentAlreadyAssignedError: The student already has a room
            AlreadyExistsError: The new student's username is taken
            TransactionConflictError: Lock races persisted over all retries
        """
        creates_student = first_name is not None and last_name is not None
        if not creates_student and not username:
            raise ValueError("username or first_name and last_name is required")

        def work(uow: UnitOfWork) -> StudentResponse:
            rooms = uow.get_repo(RoomRepository)
            students = uow.get_repo(StudentRepository)

            room = self._lock_room(rooms, dorm_id, room_number)
            occupants = students.count_by_room(room.id)
            if occupants >= room.capacity:
                raise RoomFullError(room.id, room.capacity)

            if creates_student:
                student = self._create_student(uow, students, first_name, last_name, username)
            else:
                student = students.get_by_username(username, lock_for_update=True)
                if student is None:
                    raise StudentNotFoundError(username)

            if student.room_id is not None:
                raise StudentAlreadyAssignedError(student.id, student.room_id)

            students.assign_to_room(student.id, room.id)

            # Only transition to not-free; also repairs a stale flag
            should_be_free = occupants + 1 < room.capacity
            if room.is_free != should_be_free:
                rooms.set_free(room.id, should_be_free)

            logger.info(
                "Student assigned to room",
                extra={
                    "student_id": student.id,
                    "room_id": room.id,
                    "occupants": occupants + 1,
                    "capacity": room.capacity,
                },
            )
            return StudentResponse.model_validate(student)

        work.__name__ = "assign_student"
        return self._run(work)

    def _lock_room(self, rooms: RoomRepository, dorm_id: UUID | str, room_number: str) -> Room:
        """
        Fetch the room locked for update.

        The lock is held until the enclosing unit of work ends.
        """
        room = rooms.get_by_number(str(dorm_id), room_number, lock_for_update=True)
        if room is None:
            raise RoomNotFoundError(room_number, dorm_id=dorm_id)
        return room

    def _create_student(
        self,
        uow: UnitOfWork,
        students: StudentRepository,
        first_name: str,
        last_name: str,
        username: Optional[str],
    ) -> Student:
        if username:
            if students.username_exists(username):
                raise AlreadyExistsError("Student", "username", username)
        else:
            username = UniqueUsernameGenerator(students.username_exists).generate(first_name, last_name)

        try:
            with uow.nested() as nested:
                return nested.get_repo(StudentRepository).create_student(first_name, last_name, username)
        except IntegrityError as exc:
            raise AlreadyExistsError("Student", "username", username) from exc

    # -------------------------------------------------------------------------
    # Release
    # -------------------------------------------------------------------------

    def release_student(self, student_id: UUID | str) -> Optional[str]:
        """
        Release the student's room.

        Releasing a student without a room is a successful no-op.

        Returns:
            The id of the released room, or None when nothing changed

        Raises:
            StudentNotFoundError: No such student
            TransactionConflictError: Lock races persisted over all retries
        """
        student_id = str(student_id)

        def work(uow: UnitOfWork) -> Optional[str]:
            rooms = uow.get_repo(RoomRepository)
            students = uow.get_repo(StudentRepository)

            student = students.get(student_id)
            if student is None:
                raise StudentNotFoundError(student_id)
            if student.room_id is None:
                return None

            room = rooms.get(student.room_id, lock_for_update=True)
            student = students.get(student_id, lock_for_update=True)
            if student is None:
                raise StudentNotFoundError(student_id)
            if student.room_id is None:
                return None
            if room is None or student.room_id != room.id:
                raise TransactionConflictError("Student changed rooms during release")

            students.unassign_room(student_id)
            remaining = students.count_by_room(room.id)
            should_be_free = remaining < room.capacity
            if room.is_free != should_be_free:
                rooms.set_free(room.id, should_be_free)

            logger.info(
                "Student released from room",
                extra={"student_id": student_id, "room_id": room.id, "occupants": remaining},
            )
            return room.id

        work.__name__ = "release_student"
        return self._run(work)
