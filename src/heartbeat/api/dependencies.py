"""
API Dependencies

FastAPI dependency providers. Runtime objects are created once in the
application lifespan and stored on app.state; tests replace them with
app.dependency_overrides.
"""

from fastapi import Request

from heartbeat.config import Settings
from heartbeat.domain.clock import Clock, utc_now
from heartbeat.infrastructure.database.connection import DatabaseManager
from heartbeat.infrastructure.database.user_store import UserStore
from heartbeat.infrastructure.telephony.provider import CallProvider
from heartbeat.services.alerting.evaluator import OnDemandEvaluator
from heartbeat.services.alerting.sweep import EmergencySweep
from heartbeat.services.alerting.wiring import AlertingServices


def _services(request: Request) -> AlertingServices:
    services = getattr(request.app.state, "alerting", None)
    if services is None:
        raise RuntimeError("Alerting services not initialized")
    return services


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return request.app.state.settings


def get_clock(request: Request) -> Clock:
    """Time source shared with the alerting services."""
    return getattr(request.app.state, "clock", utc_now)


def get_database(request: Request) -> DatabaseManager:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized")
    return db


def get_user_store(request: Request) -> UserStore:
    return _services(request).store


def get_call_provider(request: Request) -> CallProvider:
    return _services(request).provider


def get_evaluator(request: Request) -> OnDemandEvaluator:
    return _services(request).evaluator


def get_sweep(request: Request) -> EmergencySweep:
    return _services(request).sweep
