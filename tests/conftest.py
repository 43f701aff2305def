"""Tests configuration and fixtures."""

import asyncio
import copy
from datetime import date, datetime, timedelta, timezone
from typing import Optional

import pytest

from heartbeat.config import Settings
from heartbeat.config.settings import AlertSettings, DatabaseSettings, TelephonySettings
from heartbeat.domain.clock import ensure_aware
from heartbeat.domain.models.spoken_message import SpokenMessage
from heartbeat.domain.models.user import EmergencyContact, User
from heartbeat.infrastructure.database.user_store import UserStore
from heartbeat.infrastructure.telephony.provider import CallProvider, PlacedCall


# Fixed "now" for every time-dependent test: 2026-03-10 10:00 UTC
NOW = datetime(2026, 3, 10, 10, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


class FixedClock:
    """Settable clock."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryUserStore(UserStore):
    """Dict-backed user store with the same write semantics as SqlUserStore."""

    def __init__(self, users: Optional[list[User]] = None) -> None:
        self._users: dict[str, User] = {}
        self.alert_writes: list[tuple[str, datetime]] = []
        self.fail_get_all: Optional[Exception] = None
        self.fail_record_alert_for: set[str] = set()
        for user in users or []:
            self._users[user.user_id] = copy.deepcopy(user)

    async def get(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def get_all(self) -> list[User]:
        if self.fail_get_all is not None:
            raise self.fail_get_all
        return [copy.deepcopy(u) for u in self._users.values()]

    async def upsert(self, user: User) -> None:
        self._users[user.user_id] = copy.deepcopy(user)

    async def save_profile(self, user: User) -> None:
        stored = copy.deepcopy(user)
        existing = self._users.get(user.user_id)
        if existing is not None:
            stored.last_checkin_date = existing.last_checkin_date
            stored.last_alert_at = existing.last_alert_at
        self._users[user.user_id] = stored

    async def record_alert(self, user_id: str, at: datetime) -> None:
        if user_id in self.fail_record_alert_for:
            raise RuntimeError(f"write failed for {user_id}")
        self.alert_writes.append((user_id, at))
        user = self._users.get(user_id)
        if user is not None and (user.last_alert_at is None or at > user.last_alert_at):
            user.last_alert_at = at

    async def record_checkin(self, user_id: str, day: date) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        user.last_checkin_date = day
        return True

    def peek(self, user_id: str) -> Optional[User]:
        """Stored user without copying (assertions only)."""
        return self._users.get(user_id)


class RecordingCallProvider(CallProvider):
    """
    Provider that records calls and fails for chosen numbers.

    failures maps a phone number to the exception raised for it.
    """

    def __init__(
        self,
        name: str = "twilio",
        failures: Optional[dict[str, Exception]] = None,
        delay_for: Optional[dict[str, float]] = None,
    ) -> None:
        self._name = name
        self.failures = failures or {}
        self.delay_for = delay_for or {}
        self.calls: list[tuple[str, str, SpokenMessage]] = []

    @property
    def provider_name(self) -> str:
        return self._name

    def is_configured(self) -> bool:
        return True

    async def place_call(self, to: str, from_: str, message: SpokenMessage) -> PlacedCall:
        self.calls.append((to, from_, message))
        if to in self.delay_for:
            await asyncio.sleep(self.delay_for[to])
        if to in self.failures:
            raise self.failures[to]
        return PlacedCall(provider=self._name, call_id=f"CA{len(self.calls):04d}")

    async def health_check(self) -> bool:
        return True

    @property
    def called_numbers(self) -> list[str]:
        return [to for to, _, _ in self.calls]


def make_user(
    user_id: str = "user-1",
    checkin_days_ago: Optional[int] = 3,
    alerted_hours_ago: Optional[float] = None,
    phone1: Optional[str] = "+15550000001",
    phone2: Optional[str] = "+15550000002",
    call_name: Optional[str] = "Alice",
    language: str = "en",
    now: datetime = NOW,
) -> User:
    """Build a user relative to a reference time."""
    return User(
        user_id=user_id,
        username=f"{user_id}-name",
        call_name=call_name,
        language=language,
        last_checkin_date=(
            now.date() - timedelta(days=checkin_days_ago)
            if checkin_days_ago is not None else None
        ),
        last_alert_at=(
            ensure_aware(now - timedelta(hours=alerted_hours_ago))
            if alerted_hours_ago is not None else None
        ),
        emergency_contact=EmergencyContact(name="Bob", phone=phone1),
        emergency_contact2=EmergencyContact(name="Carol", phone=phone2),
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with an in-memory database and simulated calls."""
    return Settings(
        env="development",
        debug=False,
        database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
        telephony=TelephonySettings(
            account_sid="",
            from_number="+15559990000",
            request_timeout_seconds=2.0,
        ),
        alerts=AlertSettings(sweep_enabled=False),
    )


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def provider() -> RecordingCallProvider:
    return RecordingCallProvider()
