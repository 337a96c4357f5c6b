"""
Student service: creation and lookups outside of room assignment.
"""
from __future__ import annotations

import logging
from typing import Callable
from uuid import UUID

from sqlalchemy.orm import Session

from campus_housing.repositories.student_repository import StudentRepository
from campus_housing.schemas.student import (
    AssignmentStatusResponse,
    StudentCreate,
    StudentResponse,
)
from campus_housing.services.common import (
    AlreadyExistsError,
    StudentNotFoundError,
    UnitOfWork,
)

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create_student(self, data: StudentCreate) -> StudentResponse:
        """
        Create a student without a room.

        Raises:
            AlreadyExistsError: The username is taken
        """
        with UnitOfWork(self._session_factory) as uow:
            repo = uow.get_repo(StudentRepository)
            if repo.username_exists(data.username):
                raise AlreadyExistsError("Student", "username", data.username)
            student = repo.create_student(data.first_name, data.last_name, data.username)
            result = StudentResponse.model_validate(student)

        logger.info("Student created", extra={"student_id": result.id, "username": result.username})
        return result

    def get_student(self, student_id: UUID | str) -> StudentResponse:
        with UnitOfWork(self._session_factory) as uow:
            student = uow.get_repo(StudentRepository).get(str(student_id))
            if student is None:
                raise StudentNotFoundError(student_id)
            return StudentResponse.model_validate(student)

    def get_assignment_status(self, username: str) -> AssignmentStatusResponse:
        """Whether the student with ``username`` currently has a room."""
        with UnitOfWork(self._session_factory) as uow:
            student = uow.get_repo(StudentRepository).get_by_username(username)
            if student is None:
                raise StudentNotFoundError(username)
            return AssignmentStatusResponse(
                username=student.username,
                assigned=student.room_id is not None,
                room_id=student.room_id,
            )
