"""
Health check router.

Liveness/readiness probe. Reports the application version and whether
the travel order database answers a trivial query.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from travel_api.core.config import settings
from travel_api.interfaces.travel.dependencies import get_db_engine
from travel_api.interfaces.travel.schemas import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application status, version and database reachability.",
)
def health_check(engine: Engine = Depends(get_db_engine)) -> HealthResponse:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.error("Database health check failed: %s", type(exc).__name__)
        database = "unavailable"

    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=settings.version,
        database=database,
    )
