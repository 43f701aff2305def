"""
Call Provider Factory

Selects the call provider once at process start.

CONFIGURATION:
    HEARTBEAT_TWILIO_ACCOUNT_SID, HEARTBEAT_TWILIO_AUTH_TOKEN and
    HEARTBEAT_TWILIO_FROM_NUMBER all set -> Twilio
    anything missing                      -> simulated (console only)
"""

from enum import StrEnum
from typing import Optional

from heartbeat.config import Settings, get_settings
from heartbeat.config.logging_config import get_logger
from heartbeat.infrastructure.telephony.provider import CallProvider

logger = get_logger(__name__)


class CallProviderType(StrEnum):
    """Supported call provider types."""

    TWILIO = "twilio"
    SIMULATED = "simulated"


def resolve_provider_type(settings: Settings) -> CallProviderType:
    """Pick the provider type from configuration presence."""
    if settings.telephony.is_configured:
        return CallProviderType.TWILIO
    return CallProviderType.SIMULATED


def get_call_provider(
    settings: Optional[Settings] = None,
    provider_type: Optional[CallProviderType] = None,
) -> CallProvider:
    """
    Create the call provider for this process.

    Args:
        settings: Settings override (defaults to cached settings)
        provider_type: Explicit provider type override

    Returns:
        Call provider instance
    """
    settings = settings or get_settings()
    provider_type = provider_type or resolve_provider_type(settings)

    provider = _create_provider(provider_type, settings)

    if provider_type == CallProviderType.SIMULATED:
        logger.warning(
            "Call provider not configured, emergency calls will be simulated",
        )
    else:
        logger.info(
            "Call provider initialized",
            provider=provider.provider_name,
            configured=provider.is_configured(),
        )

    return provider


def _create_provider(provider_type: CallProviderType, settings: Settings) -> CallProvider:
    """Create provider instance by type."""
    if provider_type == CallProviderType.TWILIO:
        from heartbeat.infrastructure.telephony.twilio_provider import TwilioCallProvider
        return TwilioCallProvider(
            account_sid=settings.telephony.account_sid,
            auth_token=settings.telephony.auth_token.get_secret_value(),
            timeout_seconds=settings.telephony.request_timeout_seconds,
        )

    elif provider_type == CallProviderType.SIMULATED:
        from heartbeat.infrastructure.telephony.simulated_provider import SimulatedCallProvider
        return SimulatedCallProvider()

    else:
        raise ValueError(f"Unknown provider type: {provider_type}")
