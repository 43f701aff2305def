"""
Health Check Endpoints

Provides system health and readiness endpoints for:
- Load balancer health checks
- Kubernetes probes
- Monitoring systems
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from heartbeat import __version__
from heartbeat.api.dependencies import get_app_settings, get_call_provider, get_database
from heartbeat.config import Settings
from heartbeat.config.logging_config import get_logger
from heartbeat.domain.clock import utc_now
from heartbeat.infrastructure.database.connection import DatabaseManager
from heartbeat.infrastructure.telephony.provider import CallProvider

logger = get_logger(__name__)
router = APIRouter()

SERVICE_NAME = "heartbeat-backend"


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool
    service: str
    status: str
    version: str
    environment: str
    time: datetime


class ReadinessResponse(BaseModel):
    """Readiness check response with component health."""

    ready: bool
    call_provider: str
    components: dict[str, bool]


def _health(status: str, settings: Settings) -> HealthResponse:
    return HealthResponse(
        ok=True,
        service=SERVICE_NAME,
        status=status,
        version=__version__,
        environment=settings.env,
        time=utc_now(),
    )


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Basic health check endpoint for load balancers",
)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    """Returns 200 if the application is running."""
    return _health("healthy", settings)


@router.get(
    "/live",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_check(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return _health("alive", settings)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check including database and call provider",
)
async def readiness_check(
    db: DatabaseManager = Depends(get_database),
    provider: CallProvider = Depends(get_call_provider),
) -> ReadinessResponse:
    """
    Detailed readiness check.

    Ready when the user store is reachable. The call provider is
    reported but does not gate readiness: without it calls are
    simulated and the rest of the service still works.
    """
    components: dict[str, bool] = {}

    try:
        components["database"] = await db.health_check()
    except Exception as e:
        logger.warning("Database readiness check failed", error=str(e))
        components["database"] = False

    try:
        components["call_provider"] = await provider.health_check()
    except Exception as e:
        logger.warning("Call provider readiness check failed", error=str(e))
        components["call_provider"] = False

    return ReadinessResponse(
        ready=components["database"],
        call_provider=provider.provider_name,
        components=components,
    )
