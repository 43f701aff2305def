"""
Heartbeat Logging Configuration

structlog on top of stdlib logging. Console output in development,
one JSON object per line elsewhere.

PRIVACY: Contact phone numbers belong to third parties. Any event
field whose name mentions a phone is masked down to its last four
digits; credential fields are replaced outright.
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog

from heartbeat import __version__
from heartbeat.config.settings import Settings

SERVICE_NAME = "heartbeat-backend"

# Field names containing any of these are replaced with [REDACTED]
SENSITIVE_PATTERNS: frozenset[str] = frozenset({
    "password",
    "token",
    "secret",
    "authorization",
    "account_sid",
    "verification_code",
})

# Field names containing any of these are masked with mask_phone()
PHONE_PATTERNS: frozenset[str] = frozenset({"phone", "from_number"})

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = (
    "uvicorn.access",
    "apscheduler.scheduler",
    "apscheduler.executors.default",
    "twilio.http_client",
)


def mask_phone(phone: Optional[str]) -> str:
    """
    Mask a phone number for logging, keeping the last four digits.

    Example:
        mask_phone("+15551234567") -> "***4567"
    """
    if not phone:
        return ""
    digits = phone.strip()
    if len(digits) <= 4:
        return "***"
    return f"***{digits[-4:]}"


def _scrub(key: str, value: Any) -> Any:
    key_lower = key.lower()
    if any(pattern in key_lower for pattern in SENSITIVE_PATTERNS):
        return "[REDACTED]"
    if isinstance(value, str) and any(pattern in key_lower for pattern in PHONE_PATTERNS):
        # already-masked values pass through unchanged
        return value if value.startswith("***") or not value else mask_phone(value)
    if isinstance(value, dict):
        return {k: _scrub(k, v) for k, v in value.items()}
    if isinstance(value, list):
        return [_scrub(key, item) for item in value]
    return value


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor: redact credentials and mask phone numbers."""
    return {key: _scrub(key, value) for key, value in event_dict.items()}


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict["service"] = SERVICE_NAME
    event_dict["version"] = __version__
    return event_dict


def _build_processors(is_development: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ])

    return processors


def configure_logging(settings: Settings) -> None:
    """
    Configure structlog and the stdlib root logger.

    Called once from create_application().
    """
    structlog.configure(
        processors=_build_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.debug else logging.WARNING
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> None:
    """Attach a request correlation ID to every log line in this context."""
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


@contextmanager
def user_log_scope(user_id: str) -> Iterator[None]:
    """Attach user_id to every log line emitted inside the block."""
    with structlog.contextvars.bound_contextvars(user_id=user_id):
        yield
