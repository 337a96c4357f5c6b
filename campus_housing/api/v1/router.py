"""
API v1 router.

Aggregates all housing endpoints. The student card router is included
before the student router so ``/students/cards`` is not read as a
student id.
"""

from fastapi import APIRouter

from campus_housing.api.v1 import dorms, notifications, rooms, student_cards, students

router = APIRouter(
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        500: {"description": "Internal Server Error"},
        503: {"description": "Transaction Conflict"},
    }
)

router.include_router(dorms.router)
router.include_router(rooms.router)
router.include_router(student_cards.router)
router.include_router(students.router)
router.include_router(notifications.router)
