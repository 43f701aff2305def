"""
User Repository

Data access layer for user entities.

Writes are single statements so concurrent writers (daily sweep and
on-demand evaluation) never lose each other's updates:
- upsert: INSERT ... ON CONFLICT (user_id) DO UPDATE
- set_last_alert_at: conditional UPDATE that never moves the value backwards
- set_last_checkin_date: single-column UPDATE
"""

from datetime import date, datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import or_, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from heartbeat.domain.clock import ensure_aware, utc_now
from heartbeat.domain.enums.language import Language
from heartbeat.domain.models.user import EmergencyContact, User
from heartbeat.infrastructure.database.models.user_model import UserModel
from heartbeat.infrastructure.database.repositories.base import BaseRepository


# Columns owned by check-in and alerting, not by profile updates
STATE_COLUMNS = frozenset({"last_checkin_date", "last_alert_at"})


def to_domain(row: UserModel) -> User:
    """Map an ORM row to the domain entity."""
    return User(
        user_id=row.user_id,
        username=row.username,
        call_name=row.call_name,
        email=row.email,
        language=Language.parse(row.language),
        last_checkin_date=row.last_checkin_date,
        last_alert_at=ensure_aware(row.last_alert_at) if row.last_alert_at else None,
        emergency_contact=EmergencyContact(name=row.contact_name, phone=row.contact_phone),
        emergency_contact2=EmergencyContact(name=row.contact_name2, phone=row.contact_phone2),
        updated_at=ensure_aware(row.updated_at) if row.updated_at else utc_now(),
    )


def to_row_values(user: User) -> dict[str, Any]:
    """Map the domain entity to column values."""
    return {
        "user_id": user.user_id,
        "username": user.username,
        "call_name": user.call_name,
        "email": user.email,
        "contact_name": user.emergency_contact.name,
        "contact_phone": user.emergency_contact.phone,
        "contact_name2": user.emergency_contact2.name,
        "contact_phone2": user.emergency_contact2.phone,
        "last_checkin_date": user.last_checkin_date,
        "last_alert_at": _as_utc(user.last_alert_at) if user.last_alert_at else None,
        "language": user.language.value,
        "updated_at": _as_utc(user.updated_at),
    }


def _as_utc(value: datetime) -> datetime:
    return ensure_aware(value).astimezone(timezone.utc)


class UserRepository(BaseRepository[UserModel]):
    """
    Repository for user data access.

    Provides user-specific writes beyond basic reads.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with user model."""
        super().__init__(UserModel, session)

    async def list_all(self) -> Sequence[UserModel]:
        """Get every user (storage order by primary key)."""
        return await self.get_all()

    async def upsert(self, user: User, preserve_state: bool = False) -> None:
        """
        Insert a user or overwrite the existing row.

        Args:
            user: Domain user to persist
            preserve_state: Leave last_checkin_date and last_alert_at of an
                existing row untouched (profile-only update)
        """
        values = to_row_values(user)
        dialect = self._session.get_bind().dialect.name

        if dialect == "postgresql":
            insert_stmt = postgresql.insert(UserModel)
        elif dialect == "sqlite":
            insert_stmt = sqlite.insert(UserModel)
        else:
            raise NotImplementedError(f"Upsert not supported for dialect: {dialect}")

        stmt = insert_stmt.values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserModel.user_id],
            set_={
                key: getattr(stmt.excluded, key)
                for key in values
                if key != "user_id"
                and not (preserve_state and key in STATE_COLUMNS)
            },
        )
        await self._session.execute(stmt)

    async def set_last_alert_at(self, user_id: str, at: datetime) -> bool:
        """
        Advance last_alert_at if the new value is later.

        Args:
            user_id: User to update
            at: Alert dispatch time

        Returns:
            True if the row was updated
        """
        at = _as_utc(at)
        result = await self._session.execute(
            update(UserModel)
            .where(
                UserModel.user_id == user_id,
                or_(
                    UserModel.last_alert_at.is_(None),
                    UserModel.last_alert_at < at,
                ),
            )
            .values(last_alert_at=at, updated_at=utc_now())
        )
        return result.rowcount > 0

    async def set_last_checkin_date(self, user_id: str, day: date) -> bool:
        """
        Record a check-in day.

        Returns:
            True if the user exists and was updated
        """
        result = await self._session.execute(
            update(UserModel)
            .where(UserModel.user_id == user_id)
            .values(last_checkin_date=day, updated_at=utc_now())
        )
        return result.rowcount > 0

    async def find(self, user_id: str) -> Optional[User]:
        """Get a user as a domain entity."""
        row = await self.get_by_id(user_id)
        return to_domain(row) if row else None
