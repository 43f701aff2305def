"""
API v1 Router

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter

from heartbeat.api.v1.endpoints.health import router as health_router
from heartbeat.api.v1.endpoints.users import router as users_router
from heartbeat.api.v1.endpoints.checkin import router as checkin_router
from heartbeat.api.v1.endpoints.alerts import router as alerts_router

api_router = APIRouter()

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    checkin_router,
    tags=["Check-in"],
)

api_router.include_router(
    alerts_router,
    tags=["Alerts"],
)
