"""
Heartbeat FastAPI Application Entry Point

Main application initialization with:
- Lifespan management (startup/shutdown)
- CORS configuration
- Error handling middleware
- Router registration
- Daily sweep scheduler

This is the production entry point for the Heartbeat backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from heartbeat import __version__
from heartbeat.config import Settings, get_settings
from heartbeat.config.logging_config import configure_logging, get_logger
from heartbeat.domain.clock import Clock, utc_now
from heartbeat.infrastructure.database import DatabaseManager, SqlUserStore
from heartbeat.infrastructure.metrics import metrics_router, update_system_info
from heartbeat.infrastructure.monitoring import init_sentry
from heartbeat.infrastructure.telephony import get_call_provider
from heartbeat.services.alerting.wiring import build_alerting_services
from heartbeat.api.v1.router import api_router
from heartbeat.api.middleware.error_handler import ErrorHandlerMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Startup fails if the user store is unreachable: a check-in service
    that cannot read its users must not pretend to be up.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Starting Heartbeat application",
        env=settings.env,
        version=__version__,
    )

    init_sentry(
        dsn=settings.monitoring.dsn,
        environment=settings.env,
        release=f"heartbeat@{__version__}",
        sample_rate=settings.monitoring.sample_rate,
        traces_sample_rate=settings.monitoring.traces_sample_rate,
    )

    db = DatabaseManager(settings.database, echo=settings.debug)
    services = None

    try:
        await db.initialize()
        if not await db.health_check():
            raise RuntimeError("User store is unreachable, refusing to start")
        if settings.database.auto_create_schema:
            await db.create_schema()
        logger.info("Database connection initialized")

        provider = get_call_provider(settings)
        services = build_alerting_services(
            settings,
            SqlUserStore(db),
            provider,
            clock=app.state.clock,
        )

        app.state.db = db
        app.state.alerting = services

        update_system_info(
            environment=settings.env,
            call_provider=provider.provider_name,
            version=__version__,
        )

        if services.scheduler is not None:
            services.scheduler.start()
        else:
            logger.info("Daily sweep disabled")

        yield

    finally:
        logger.info("Shutting down Heartbeat application")

        if services is not None and services.scheduler is not None:
            await services.scheduler.shutdown()

        await db.close()

        logger.info("Heartbeat application shutdown complete")


def create_application(
    settings: Optional[Settings] = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings override (defaults to cached settings)
        clock: Time source for check-ins and alert decisions

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Heartbeat API",
        description="Daily check-in service that calls emergency contacts when a user goes silent",
        version=__version__,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.clock = clock

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(
        api_router,
        prefix=f"/api/{settings.api_version}",
    )
    app.include_router(metrics_router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint - basic info."""
        return {
            "name": "Heartbeat API",
            "version": __version__,
            "status": "operational",
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "heartbeat.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.env == "development",
        log_level=settings.log_level.lower(),
    )
