"""
SQLAlchemy models for the housing service.

Importing this package registers every table on ``Base.metadata``.
"""

from campus_housing.models.base import Base, BaseModel, generate_uuid
from campus_housing.models.dorm import Dorm
from campus_housing.models.room import Room
from campus_housing.models.student import Student
from campus_housing.models.student_card import StudentCard

__all__ = [
    "Base",
    "BaseModel",
    "generate_uuid",
    "Dorm",
    "Room",
    "Student",
    "StudentCard",
]
