"""
Heartbeat Application Settings

Configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """User store database configuration."""

    model_config = SettingsConfigDict(env_prefix="HEARTBEAT_DB_")

    url: Optional[str] = Field(
        default=None,
        description="Explicit SQLAlchemy async URL (overrides host/port/name)",
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    name: str = Field(default="heartbeat", description="Database name")
    user: str = Field(default="heartbeat", description="Database user")
    password: SecretStr = Field(default=SecretStr("dev_password"), description="Database password")
    pool_size: int = Field(default=5, ge=1, le=100, description="Connection pool size")
    max_overflow: int = Field(default=10, ge=0, le=100, description="Max overflow connections")
    auto_create_schema: bool = Field(
        default=True,
        description="Create missing tables at startup (use Alembic in production)",
    )

    @property
    def async_url(self) -> str:
        """Generate async database URL for SQLAlchemy."""
        if self.url:
            return self.url
        password = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{password}@{self.host}:{self.port}/{self.name}"

    @property
    def is_sqlite(self) -> bool:
        return self.async_url.startswith("sqlite")


class TelephonySettings(BaseSettings):
    """
    Call provider configuration.

    Real calls are placed only when the account SID, auth token and
    source number are all present. Otherwise calls are simulated.
    """

    model_config = SettingsConfigDict(env_prefix="HEARTBEAT_TWILIO_")

    account_sid: str = Field(default="", description="Twilio account SID")
    auth_token: SecretStr = Field(default=SecretStr(""), description="Twilio auth token")
    from_number: str = Field(default="", description="Caller ID in E.164 format")
    request_timeout_seconds: float = Field(
        default=20.0,
        ge=1.0,
        le=120.0,
        description="Upper bound for a single provider request",
    )

    @property
    def is_configured(self) -> bool:
        return bool(
            self.account_sid
            and self.auth_token.get_secret_value()
            and self.from_number
        )


class AlertSettings(BaseSettings):
    """Emergency evaluation and sweep configuration."""

    model_config = SettingsConfigDict(env_prefix="HEARTBEAT_ALERT_")

    overdue_days: int = Field(default=2, ge=1, le=30, description="Missed days before alerting")
    cooldown_hours: float = Field(default=24.0, gt=0, description="Minimum hours between sweep alerts")
    sweep_enabled: bool = Field(default=True, description="Run the daily sweep scheduler")
    sweep_hour: int = Field(default=10, ge=0, le=23, description="Hour of the daily sweep")
    sweep_minute: int = Field(default=0, ge=0, le=59, description="Minute of the daily sweep")
    timezone: str = Field(default="UTC", description="Reference timezone for calendar days")
    on_demand_respects_cooldown: bool = Field(
        default=False,
        description="Apply the cooldown gate to on-demand evaluations as well",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject unknown IANA timezone names early."""
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v


class MonitoringSettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="HEARTBEAT_SENTRY_")

    dsn: str = Field(default="", description="Sentry DSN (empty disables tracking)")
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with HEARTBEAT_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        db_url = settings.database.async_url
    """

    model_config = SettingsConfigDict(
        env_prefix="HEARTBEAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins"
    )

    # Nested settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    telephony: TelephonySettings = Field(default_factory=TelephonySettings)
    alerts: AlertSettings = Field(default_factory=AlertSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and inject it.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
