"""Student meal card endpoints."""

from fastapi import APIRouter, Query, status

from campus_housing.api.deps import StudentCardServiceDep
from campus_housing.schemas.student_card import (
    BalanceAdjustment,
    StudentCardCreate,
    StudentCardResponse,
)

router = APIRouter(prefix="/students/cards", tags=["student cards"])


@router.post("", response_model=StudentCardResponse, status_code=status.HTTP_201_CREATED)
def create_card(payload: StudentCardCreate, service: StudentCardServiceDep) -> StudentCardResponse:
    """Create the student's card, or return it when it already exists."""
    return service.create_card_if_missing(payload.student_username)


@router.get("", response_model=StudentCardResponse)
def get_card(
    service: StudentCardServiceDep,
    student_username: str = Query(..., alias="studentUsername", min_length=1),
) -> StudentCardResponse:
    return service.get_card(student_username)


@router.post("/balance", response_model=StudentCardResponse)
def adjust_balance(payload: BalanceAdjustment, service: StudentCardServiceDep) -> StudentCardResponse:
    return service.adjust_balance(payload.student_username, payload.delta)
