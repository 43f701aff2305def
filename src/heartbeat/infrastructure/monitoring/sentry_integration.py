"""
Sentry Error Tracking Integration

Errors from the sweep and on-demand evaluation are reported with the
affected user_id as a tag. Nothing else about the user leaves the
process.

SECURITY: Twilio credentials and contact phone numbers are scrubbed
from every event in before_send.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from heartbeat.config.logging_config import get_logger

logger = get_logger(__name__)

REDACTED = "[REDACTED]"

# Keys whose values are always dropped
SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "authorization",
    "account_sid",
    "phone",
    "from_number",
})

_PHONE_RE = re.compile(r"\+?\d[\d\s\-()]{7,}\d")
_TWILIO_SID_RE = re.compile(r"\bAC[0-9a-fA-F]{32}\b")


def scrub_text(value: str) -> str:
    """Replace phone numbers and Twilio account SIDs in free text."""
    value = _TWILIO_SID_RE.sub(REDACTED, value)
    return _PHONE_RE.sub(REDACTED, value)


def scrub(data: Any, key: str = "") -> Any:
    """Recursively scrub a JSON-like structure."""
    normalized = key.lower().replace("-", "_")
    if any(sensitive in normalized for sensitive in SENSITIVE_KEYS):
        return REDACTED
    if isinstance(data, dict):
        return {k: scrub(v, str(k)) for k, v in data.items()}
    if isinstance(data, list):
        return [scrub(item, key) for item in data]
    if isinstance(data, str):
        return scrub_text(data)
    return data


def before_send(event: dict, hint: dict) -> Optional[dict]:
    request = event.get("request")
    if isinstance(request, dict):
        for part in ("data", "headers", "query_string"):
            if part in request:
                request[part] = scrub(request[part])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if "message" in breadcrumb and isinstance(breadcrumb["message"], str):
            breadcrumb["message"] = scrub_text(breadcrumb["message"])
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = scrub(breadcrumb["data"])

    if "extra" in event:
        event["extra"] = scrub(event["extra"])

    for exc in event.get("exception", {}).get("values", []):
        if isinstance(exc.get("value"), str):
            exc["value"] = scrub_text(exc["value"])

    return event


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = "heartbeat@0.1.0",
    sample_rate: float = 1.0,
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry if a DSN is configured.

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.info("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        sample_rate=sample_rate,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            # structlog lines stay out of Sentry
            LoggingIntegration(level=None, event_level=None),
        ],
        send_default_pii=False,
        max_breadcrumbs=50,
    )

    logger.info("Sentry initialized", environment=environment, release=release)
    return True


def capture_exception_with_context(
    exception: Exception,
    user_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Report an exception tagged with the affected user.

    A no-op when Sentry is not initialized.
    """
    with sentry_sdk.new_scope() as scope:
        if user_id:
            scope.set_tag("user_id", user_id)
        for key, value in scrub(extra or {}).items():
            scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
