"""
SightSharing Backend: Health Check Route
========================================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Checks the two things every write depends on: the SQLite store
       answers a query, and the upload directory is writable.

Status levels:
    - healthy:   database reachable and uploads directory writable (HTTP 200)
    - unhealthy: either dependency failed (HTTP 503)
"""

import logging
import os
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from sightsharing import __version__
from sightsharing.database import engine
from sightsharing.schemas.destination import HealthResponse
from sightsharing.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    storage_status = "writable"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Upload Storage ──────────────────────────────────────────────
    if not os.access(file_service.uploads_dir, os.W_OK):
        storage_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: uploads dir not writable: %s", file_service.uploads_dir)

    if overall != "healthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
