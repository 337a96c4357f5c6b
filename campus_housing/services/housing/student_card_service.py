"""
Student meal card service.

Cards are addressed by the owner's username. Balance changes are applied
atomically in SQL and may never make the balance negative.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_housing.models.student import Student
from campus_housing.models.student_card import StudentCard
from campus_housing.repositories.student_card_repository import StudentCardRepository
from campus_housing.repositories.student_repository import StudentRepository
from campus_housing.schemas.student_card import StudentCardResponse
from campus_housing.services.common import (
    InsufficientBalanceError,
    StudentCardNotFoundError,
    StudentNotFoundError,
    UnitOfWork,
)

logger = logging.getLogger(__name__)


def _to_response(card: StudentCard, student: Student) -> StudentCardResponse:
    return StudentCardResponse(
        id=card.id,
        student_id=student.id,
        student_username=student.username,
        balance=float(card.balance),
    )


class StudentCardService:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_student(self, uow: UnitOfWork, username: str) -> Student:
        student = uow.get_repo(StudentRepository).get_by_username(username)
        if student is None:
            raise StudentNotFoundError(username)
        return student

    def create_card_if_missing(self, username: str) -> StudentCardResponse:
        """
        Return the student's card, creating an empty one when missing.

        Concurrent callers race on the unique ``student_id``; the loser
        reads the winner's card.

        Raises:
            StudentNotFoundError: No student with ``username``
        """
        with UnitOfWork(self._session_factory) as uow:
            student = self._get_student(uow, username)
            cards = uow.get_repo(StudentCardRepository)

            card = cards.get_by_student(student.id)
            if card is None:
                try:
                    with uow.nested() as nested:
                        card = nested.get_repo(StudentCardRepository).create_for_student(student.id)
                    logger.info("Student card created", extra={"username": username})
                except IntegrityError:
                    card = cards.get_by_student(student.id)
                    if card is None:
                        raise
            return _to_response(card, student)

    def get_card(self, username: str) -> StudentCardResponse:
        with UnitOfWork(self._session_factory) as uow:
            student = self._get_student(uow, username)
            card = uow.get_repo(StudentCardRepository).get_by_student(student.id)
            if card is None:
                raise StudentCardNotFoundError(username)
            return _to_response(card, student)

    def adjust_balance(self, username: str, delta: Decimal) -> StudentCardResponse:
        """
        Add ``delta`` (possibly negative) to the card balance.

        Raises:
            StudentNotFoundError: No student with ``username``
            StudentCardNotFoundError: The student has no card
            InsufficientBalanceError: The balance would become negative
        """
        with UnitOfWork(self._session_factory) as uow:
            student = self._get_student(uow, username)
            cards = uow.get_repo(StudentCardRepository)

            if not cards.adjust_balance(student.id, delta):
                card = cards.get_by_student(student.id)
                if card is None:
                    raise StudentCardNotFoundError(username)
                raise InsufficientBalanceError(username, card.balance, delta)

            card = cards.get_by_student(student.id)
            result = _to_response(card, student)

        logger.info("Card balance adjusted", extra={"username": username, "delta": str(delta)})
        return result
