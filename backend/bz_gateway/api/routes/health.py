"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health always returns 200 if the process is up (liveness)
    - GET /api/health/ready returns 503 if the database is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the load balancer
"""

import logging
import platform
import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from bz_gateway.config import get_settings
from bz_gateway.core.api_result import utc_timestamp
from bz_gateway.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "ok",
        "timestamp": utc_timestamp(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "environment": get_settings().environment,
        "pythonVersion": platform.python_version(),
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
                "timestamp": utc_timestamp(),
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "timestamp": utc_timestamp(),
    }
