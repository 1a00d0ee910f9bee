"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable or not initialized (readiness)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from userposts.config import get_settings
from userposts.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE_NAME = "userposts-api"


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Liveness: no dependencies touched."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "environment": get_settings().environment,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness: runs SELECT 1 through the session manager."""
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness probe failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
