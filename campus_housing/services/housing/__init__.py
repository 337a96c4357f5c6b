"""Housing domain services."""

from campus_housing.services.housing.assignment_service import RoomAssignmentService
from campus_housing.services.housing.dorm_service import DormService
from campus_housing.services.housing.student_card_service import StudentCardService
from campus_housing.services.housing.student_service import StudentService

__all__ = [
    "RoomAssignmentService",
    "DormService",
    "StudentCardService",
    "StudentService",
]
