"""
User Store Interface

The persistence contract consumed by the alerting core.
Each operation runs in its own transaction.

ARCHITECTURE: Alerting services depend on UserStore only, so the
SQL implementation can be swapped (or faked in tests) freely.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from heartbeat.domain.models.user import User
from heartbeat.infrastructure.database.connection import DatabaseManager
from heartbeat.infrastructure.database.repositories.user_repository import (
    UserRepository,
    to_domain,
)


class UserStore(ABC):
    """
    Abstract user store.

    Implementations must serialize writes per user: record_alert and
    record_checkin touch a single column atomically, and upsert
    overwrites by primary key.
    """

    @abstractmethod
    async def get(self, user_id: str) -> Optional[User]:
        """Get a user by ID, or None."""
        pass

    @abstractmethod
    async def get_all(self) -> list[User]:
        """Get every known user."""
        pass

    @abstractmethod
    async def upsert(self, user: User) -> None:
        """Insert or fully overwrite a user."""
        pass

    @abstractmethod
    async def save_profile(self, user: User) -> None:
        """
        Insert a user or update its profile fields.

        last_checkin_date and last_alert_at of an existing user are kept.
        """
        pass

    @abstractmethod
    async def record_alert(self, user_id: str, at: datetime) -> None:
        """Advance last_alert_at (never backwards)."""
        pass

    @abstractmethod
    async def record_checkin(self, user_id: str, day: date) -> bool:
        """Set last_checkin_date; False if the user does not exist."""
        pass


class SqlUserStore(UserStore):
    """
    UserStore backed by the SQLAlchemy database manager.

    Usage:
        store = SqlUserStore(db)
        user = await store.get("ios-alice")
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def get(self, user_id: str) -> Optional[User]:
        async with self._db.session() as session:
            return await UserRepository(session).find(user_id)

    async def get_all(self) -> list[User]:
        async with self._db.session() as session:
            rows = await UserRepository(session).list_all()
            return [to_domain(row) for row in rows]

    async def upsert(self, user: User) -> None:
        async with self._db.session() as session:
            await UserRepository(session).upsert(user)

    async def save_profile(self, user: User) -> None:
        async with self._db.session() as session:
            await UserRepository(session).upsert(user, preserve_state=True)

    async def record_alert(self, user_id: str, at: datetime) -> None:
        async with self._db.session() as session:
            await UserRepository(session).set_last_alert_at(user_id, at)

    async def record_checkin(self, user_id: str, day: date) -> bool:
        async with self._db.session() as session:
            return await UserRepository(session).set_last_checkin_date(user_id, day)
