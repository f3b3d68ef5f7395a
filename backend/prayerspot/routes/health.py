"""
PrayerSpot Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and container probes.
How:   Runs SELECT 1 against the store and reports the result.

Always answers 200: the process stays up when the store is down, and the
body tells the caller which of the two is the case.
"""

import logging
import time

from fastapi import APIRouter, Request

from prayerspot import __version__
from prayerspot.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await request.app.state.database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: store unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
