"""Repositories over the housing tables."""

from campus_housing.repositories.base_repository import BaseRepository
from campus_housing.repositories.dorm_repository import DormRepository
from campus_housing.repositories.room_repository import RoomRepository
from campus_housing.repositories.student_card_repository import StudentCardRepository
from campus_housing.repositories.student_repository import StudentRepository

__all__ = [
    "BaseRepository",
    "DormRepository",
    "RoomRepository",
    "StudentCardRepository",
    "StudentRepository",
]
