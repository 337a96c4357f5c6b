"""
FastAPI dependencies.

Services are built per request from the session factory and dining
client stored on ``app.state`` by the application factory, so tests can
point the app at their own database.
"""

from typing import Annotated, Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from campus_housing.services.housing import (
    DormService,
    RoomAssignmentService,
    StudentCardService,
    StudentService,
)
from campus_housing.services.integrations import DiningClient


def get_session_factory(request: Request) -> Callable[[], Session]:
    return request.app.state.session_factory


SessionFactoryDep = Annotated[Callable[[], Session], Depends(get_session_factory)]


def get_assignment_service(session_factory: SessionFactoryDep) -> RoomAssignmentService:
    return RoomAssignmentService(session_factory)


def get_dorm_service(session_factory: SessionFactoryDep) -> DormService:
    return DormService(session_factory)


def get_student_service(session_factory: SessionFactoryDep) -> StudentService:
    return StudentService(session_factory)


def get_student_card_service(session_factory: SessionFactoryDep) -> StudentCardService:
    return StudentCardService(session_factory)


def get_dining_client(request: Request) -> DiningClient:
    return request.app.state.dining_client


AssignmentServiceDep = Annotated[RoomAssignmentService, Depends(get_assignment_service)]
DormServiceDep = Annotated[DormService, Depends(get_dorm_service)]
StudentServiceDep = Annotated[StudentService, Depends(get_student_service)]
StudentCardServiceDep = Annotated[StudentCardService, Depends(get_student_card_service)]
DiningClientDep = Annotated[DiningClient, Depends(get_dining_client)]
