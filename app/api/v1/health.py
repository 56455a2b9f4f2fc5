"""Health check endpoint with database connectivity and cache size."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.api.deps import get_member_cache
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse
from app.services.member_cache import MemberCache

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[MemberCache, Depends(get_member_cache)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=request.app.state.settings.APP_ENV,
        database=db_status,
        cached_members=len(cache),
    )
