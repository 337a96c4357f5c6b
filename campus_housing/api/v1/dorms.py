"""Dorm endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter

from campus_housing.api.deps import DormServiceDep
from campus_housing.schemas.dorm import DormDetailResponse, DormResponse

router = APIRouter(prefix="/doms", tags=["dorms"])


@router.get("", response_model=List[DormResponse])
def list_dorms(service: DormServiceDep) -> List[DormResponse]:
    return service.list_dorms()


@router.get("/{dorm_id}", response_model=DormDetailResponse)
def get_dorm(dorm_id: UUID, service: DormServiceDep) -> DormDetailResponse:
    return service.get_dorm(dorm_id)
