"""Outbound call provider abstraction package."""

from heartbeat.infrastructure.telephony.provider import (
    CallProvider,
    PlacedCall,
    CallProviderError,
    CallAuthenticationError,
    CallRateLimitError,
)
from heartbeat.infrastructure.telephony.simulated_provider import SimulatedCallProvider
from heartbeat.infrastructure.telephony.provider_factory import (
    get_call_provider,
    CallProviderType,
)

__all__ = [
    # Base types
    "CallProvider",
    "PlacedCall",
    "CallProviderError",
    "CallAuthenticationError",
    "CallRateLimitError",
    # Providers
    "SimulatedCallProvider",
    # Factory
    "get_call_provider",
    "CallProviderType",
]
