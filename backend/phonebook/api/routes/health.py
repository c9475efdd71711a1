"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import phonebook.infrastructure.database as database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "success", "data": {"service": "phonebook-api"}}


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes database connectivity."""
    db_manager = database.db_manager
    db_ok = await db_manager.health_check() if db_manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "data": {"database": "unavailable"}},
        )
    return {"status": "success", "data": {"database": "healthy"}}
