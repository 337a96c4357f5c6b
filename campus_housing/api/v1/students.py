"""Student endpoints, including room release."""

from uuid import UUID

from fastapi import APIRouter, status

from campus_housing.api.deps import AssignmentServiceDep, StudentServiceDep
from campus_housing.schemas.base import StatusResponse
from campus_housing.schemas.student import ReleaseRequest, StudentCreate, StudentResponse
from campus_housing.services.common import StudentNotFoundError, ValidationError

router = APIRouter(prefix="/students", tags=["students"])


@router.post("/release", response_model=StatusResponse)
def release_room(payload: ReleaseRequest, service: AssignmentServiceDep) -> StatusResponse:
    """Release the student's room; succeeds when the student has none."""
    try:
        service.release_student(payload.student_id)
    except StudentNotFoundError as exc:
        raise ValidationError(exc.message, field="studentId") from exc
    return StatusResponse(status="ok")


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, service: StudentServiceDep) -> StudentResponse:
    return service.create_student(payload)


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: UUID, service: StudentServiceDep) -> StudentResponse:
    return service.get_student(student_id)
