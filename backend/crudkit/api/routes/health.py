"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness) and
      reports the deployment tier and whether error detail is redacted there
    - GET /api/v1/health/ready returns 503 if database is unreachable, otherwise
      200 with the entity tables the CRUD routes serve
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import crudkit.infrastructure.database as database
from crudkit.config import get_settings
from crudkit.db.base import Base

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "crudkit-api",
        "environment": settings.environment,
        "error_detail": "redacted" if settings.is_sensitive_environment else "included",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe: includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "entities": sorted(Base.metadata.tables),
    }
