"""
Simulated Call Provider

Null-object provider used when no real provider is configured.
Logs the call it would have placed and reports success, so local
and staging environments exercise the full alert path.
"""

from heartbeat.config.logging_config import get_logger, mask_phone
from heartbeat.domain.models.dispatch import PROVIDER_SIMULATED
from heartbeat.domain.models.spoken_message import SpokenMessage
from heartbeat.infrastructure.telephony.provider import CallProvider, PlacedCall

logger = get_logger(__name__)


class SimulatedCallProvider(CallProvider):
    """Console-only call provider."""

    @property
    def provider_name(self) -> str:
        return PROVIDER_SIMULATED

    def is_configured(self) -> bool:
        return False

    async def place_call(
        self,
        to: str,
        from_: str,
        message: SpokenMessage,
    ) -> PlacedCall:
        logger.warning(
            "Emergency call simulated",
            to=mask_phone(to),
            voice_locale=message.voice_locale,
            message=message.to_text(),
        )
        return PlacedCall(provider=self.provider_name, call_id=None, status="simulated")

    async def health_check(self) -> bool:
        return True
