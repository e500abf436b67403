"""Health Routes - liveness and database readiness for the marketplace API.

Invariants:
    - GET /health/ answers 200 while the process serves requests; it never touches the database
    - GET /health/ready answers 503 until init_db has run and SELECT 1 succeeds on the pool
    - Name and version come from the FastAPI app, so they match the OpenAPI document
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from marketplace.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _not_ready(reason: str) -> JSONResponse:
    logger.warning(f"Readiness check failed: {reason}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    return {
        "status": "healthy",
        "service": request.app.title,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness_check():
    # Looked up per call: the lifespan (or a test) installs the manager after import
    manager = database.db_manager
    if manager is None:
        return _not_ready("database_not_initialized")
    if not await manager.health_check():
        return _not_ready("database_unavailable")
    return {"status": "ready", "checks": {"database": "healthy"}}
