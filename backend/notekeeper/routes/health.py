"""
NoteKeeper Backend: Health Check Route
========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 against the database and reports the result.
Who:   Called by container health checks and load balancers.

Status levels:
    healthy:   Database reachable
    unhealthy: Database unreachable (every dashboard route would 500)

Not behind the auth gate: probes carry no user identity.
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from notekeeper import __version__
from notekeeper.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    """Probe database connectivity and return aggregate status with uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        from notekeeper.database import engine
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
