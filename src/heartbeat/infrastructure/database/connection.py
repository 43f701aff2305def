"""
Database Connection Management

Async SQLAlchemy engine and session handling for the user store.
PostgreSQL (asyncpg) in deployment, SQLite (aiosqlite) for local runs
and tests.

SECURITY: Connection URLs carry credentials and must never be logged.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from heartbeat.config.logging_config import get_logger
from heartbeat.config.settings import DatabaseSettings

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def engine_options(db_settings: DatabaseSettings, echo: bool = False) -> dict[str, Any]:
    """Keyword arguments for create_async_engine for the configured backend."""
    options: dict[str, Any] = {"echo": echo}

    if db_settings.is_sqlite:
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in db_settings.async_url:
            # every session must share the single in-memory database
            options["poolclass"] = StaticPool
        return options

    options.update(
        pool_size=db_settings.pool_size,
        max_overflow=db_settings.max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    return options


class DatabaseManager:
    """
    Owns the engine and hands out transactional sessions.

    Usage:
        db = DatabaseManager(settings.database)
        await db.initialize()
        async with db.session() as session:
            ...
        await db.close()
    """

    def __init__(
        self,
        database_settings: Optional[DatabaseSettings] = None,
        echo: bool = False,
    ) -> None:
        self._settings = database_settings or DatabaseSettings()
        self._echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    async def initialize(self) -> None:
        if self._engine is not None:
            logger.warning("Database already initialized")
            return

        self._engine = create_async_engine(
            self._settings.async_url,
            **engine_options(self._settings, echo=self._echo),
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(
            "Database engine initialized",
            backend="sqlite" if self._settings.is_sqlite else "postgresql",
        )

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    async def create_schema(self) -> None:
        """
        Create missing tables.

        Convenience for local runs; deployed schemas are managed by Alembic.
        """
        engine = self._require_engine()

        # registers the users table on Base.metadata
        from heartbeat.infrastructure.database.models import UserModel  # noqa: F401

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        One unit of work: committed on success, rolled back on error.
        """
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True if a trivial query succeeds."""
        if self._engine is None:
            return False

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(
                "Database health check failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        return True

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None
