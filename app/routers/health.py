# =============================================================================
# app/routers/health.py - Service Probes
# =============================================================================
# /health      process is up, plus the registered content types
# /health/ready  documents table and media bucket are reachable
# /health/live   bare liveness for the container runtime
#
# Backend probes go through the injected services, so tests see the
# in-memory store and storage instead of Supabase.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.config import settings
from app.dependencies import Services, get_services
from core.schemas import schema_names

logger = logging.getLogger(__name__)

router = APIRouter()

VERSION = "1.0.0"

HEALTHY = "healthy"
NOT_CONFIGURED = "not configured"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    version: str
    content_types: int


class ChecksResponse(BaseModel):
    """Outcome per backend: "healthy", "not configured" or "unhealthy: <reason>"."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _probe(backend: str, ping: Callable[[], object]) -> str:
    try:
        ping()
    except Exception as e:
        logger.warning(f"Readiness probe for {backend} failed: {e}")
        return f"unhealthy: {str(e)[:50]}"
    return HEALTHY


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status=HEALTHY,
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
        content_types=len(schema_names()),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(services: Services = Depends(get_services)):
    """
    Probe the documents table and the media bucket.

    Always answers 200; a failing backend shows up as status "degraded"
    with the reason in its check. A missing bucket only disables uploads,
    so it does not degrade the service.
    """
    storage = services.media.storage

    checks = ChecksResponse(
        database=_probe("documents", services.documents.ping),
        storage=_probe("storage", storage.ping) if storage.configured else NOT_CONFIGURED,
    )
    ready = checks.database == HEALTHY and checks.storage in (HEALTHY, NOT_CONFIGURED)

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    return LivenessResponse(status="alive", timestamp=_now())
