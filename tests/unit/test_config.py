"""
Unit Tests for Settings and Logging Helpers
"""

import pytest
from pydantic import SecretStr, ValidationError

from heartbeat.config.logging_config import _redact_sensitive_data, mask_phone
from heartbeat.config.settings import AlertSettings, DatabaseSettings, Settings, TelephonySettings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("HEARTBEAT_ALERT_COOLDOWN_HOURS", raising=False)
        alerts = AlertSettings()

        assert alerts.overdue_days == 2
        assert alerts.cooldown_hours == 24
        assert alerts.sweep_hour == 10
        assert alerts.sweep_minute == 0
        assert alerts.timezone == "UTC"
        assert alerts.on_demand_respects_cooldown is False

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("HEARTBEAT_ALERT_SWEEP_HOUR", "7")
        monkeypatch.setenv("HEARTBEAT_ALERT_TIMEZONE", "Asia/Shanghai")

        alerts = AlertSettings()

        assert alerts.sweep_hour == 7
        assert alerts.timezone == "Asia/Shanghai"

    def test_unknown_timezone_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlertSettings(timezone="Mars/Olympus_Mons")

    def test_telephony_configured_only_when_complete(self) -> None:
        assert TelephonySettings(account_sid="AC1", auth_token=SecretStr("t")).is_configured is False
        assert TelephonySettings(
            account_sid="AC1",
            auth_token=SecretStr("t"),
            from_number="+15559990000",
        ).is_configured is True

    def test_explicit_database_url(self) -> None:
        db = DatabaseSettings(url="sqlite+aiosqlite:///./heartbeat.db")

        assert db.is_sqlite is True

    def test_postgres_url_from_parts(self) -> None:
        db = DatabaseSettings(host="db", port=5433, name="hb", user="svc", password=SecretStr("pw"))

        assert db.async_url == "postgresql+asyncpg://svc:pw@db:5433/hb"
        assert db.is_sqlite is False

    def test_is_production(self) -> None:
        assert Settings(env="production").is_production() is True
        assert Settings(env="development").is_production() is False


class TestLoggingHelpers:
    """Tests for log redaction."""

    @pytest.mark.parametrize("phone,expected", [
        ("+15551234567", "***4567"),
        ("123", "***"),
        ("", ""),
        (None, ""),
    ])
    def test_mask_phone(self, phone, expected) -> None:
        assert mask_phone(phone) == expected

    def test_sensitive_keys_redacted(self) -> None:
        event = _redact_sensitive_data(None, "info", {"auth_token": "abc", "user_id": "u1"})

        assert event["auth_token"] == "[REDACTED]"
        assert event["user_id"] == "u1"

    def test_phone_fields_masked(self) -> None:
        event = _redact_sensitive_data(
            None,
            "info",
            {"to_phone": "+15551234567", "contact": {"phone": "+15559876543"}, "phone": "***1111"},
        )

        assert event["to_phone"] == "***4567"
        assert event["contact"]["phone"] == "***6543"
        assert event["phone"] == "***1111"
