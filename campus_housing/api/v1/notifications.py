"""Dining notifications proxied from the dining service."""

from typing import Optional

from fastapi import APIRouter, Header, Response
from starlette.concurrency import run_in_threadpool

from campus_housing.api.deps import DiningClientDep

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/menus")
async def today_menus(
    client: DiningClientDep,
    x_student_id: Optional[str] = Header(default=None, alias="X-Student-ID"),
) -> Response:
    """Today's menus exactly as the dining service returned them."""
    upstream = await run_in_threadpool(client.get_today_menus, x_student_id)
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=upstream.headers,
    )
