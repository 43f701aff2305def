"""
Contact Dispatcher

Delivers one spoken alert to one emergency contact through the
configured call provider.

ARCHITECTURE: The dispatcher never raises for delivery problems.
Missing phone numbers, provider errors and timeouts all become
failed DispatchResults so one bad contact cannot stop the others.
"""

import asyncio
import time

from heartbeat.config.logging_config import get_logger, mask_phone
from heartbeat.domain.models.dispatch import DispatchResult, PROVIDER_NONE
from heartbeat.domain.models.spoken_message import SpokenMessage
from heartbeat.domain.models.user import EmergencyContact
from heartbeat.infrastructure.metrics.prometheus_metrics import track_dispatch
from heartbeat.infrastructure.telephony.provider import (
    CallProvider,
    CallProviderError,
)

logger = get_logger(__name__)

UNKNOWN_CONTACT_NAME = "Unknown"


class ContactDispatcher:
    """
    Places a single alert call with a bounded wait.

    Usage:
        dispatcher = ContactDispatcher(provider, from_number="+15550000000")
        result = await dispatcher.dispatch(contact, message, slot=1)
    """

    def __init__(
        self,
        provider: CallProvider,
        from_number: str = "",
        timeout_seconds: float = 20.0,
    ) -> None:
        """
        Args:
            provider: Call provider (real or simulated)
            from_number: Caller ID for outbound calls
            timeout_seconds: Upper bound on one provider request
        """
        self._provider = provider
        self._from_number = from_number
        self._timeout_seconds = timeout_seconds

    @property
    def provider_name(self) -> str:
        return self._provider.provider_name

    async def dispatch(
        self,
        contact: EmergencyContact,
        message: SpokenMessage,
        slot: int = 1,
    ) -> DispatchResult:
        """
        Call one emergency contact.

        Args:
            contact: Contact to call
            message: Composed spoken message
            slot: 1-based contact position, reported in the result

        Returns:
            DispatchResult (ok=False on any delivery failure)
        """
        contact_name = contact.name or UNKNOWN_CONTACT_NAME

        if not contact.has_phone:
            logger.warning(
                "No emergency contact phone configured",
                contact_slot=slot,
            )
            track_dispatch(PROVIDER_NONE, "no_phone")
            return DispatchResult(
                contact_slot=slot,
                ok=False,
                provider=PROVIDER_NONE,
                contact_name=contact_name,
                contact_phone=contact.phone,
                error_detail="No phone number",
            )

        phone = contact.phone.strip()
        provider_name = self._provider.provider_name
        start = time.monotonic()

        try:
            placed = await asyncio.wait_for(
                self._provider.place_call(phone, self._from_number, message),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            elapsed = time.monotonic() - start
            logger.error(
                "Emergency call timed out",
                contact_slot=slot,
                phone=mask_phone(phone),
                provider=provider_name,
                timeout_seconds=self._timeout_seconds,
            )
            track_dispatch(provider_name, "timeout", elapsed)
            return DispatchResult(
                contact_slot=slot,
                ok=False,
                provider=provider_name,
                contact_name=contact_name,
                contact_phone=phone,
                error_detail=f"Call request timed out after {self._timeout_seconds:g}s",
            )
        except CallProviderError as e:
            elapsed = time.monotonic() - start
            logger.error(
                "Emergency call failed",
                contact_slot=slot,
                phone=mask_phone(phone),
                provider=e.provider,
                error=str(e),
                retryable=e.is_retryable,
            )
            track_dispatch(provider_name, "failure", elapsed)
            return DispatchResult(
                contact_slot=slot,
                ok=False,
                provider=e.provider or provider_name,
                contact_name=contact_name,
                contact_phone=phone,
                error_detail=str(e),
            )
        except Exception as e:
            elapsed = time.monotonic() - start
            logger.exception(
                "Emergency call failed with unexpected error",
                contact_slot=slot,
                phone=mask_phone(phone),
                provider=provider_name,
                error_type=type(e).__name__,
            )
            track_dispatch(provider_name, "failure", elapsed)
            return DispatchResult(
                contact_slot=slot,
                ok=False,
                provider=provider_name,
                contact_name=contact_name,
                contact_phone=phone,
                error_detail=str(e) or type(e).__name__,
            )

        elapsed = time.monotonic() - start
        track_dispatch(placed.provider, "success", elapsed)

        logger.info(
            "Emergency call placed",
            contact_slot=slot,
            phone=mask_phone(phone),
            provider=placed.provider,
            call_id=placed.call_id,
            status=placed.status,
        )

        return DispatchResult(
            contact_slot=slot,
            ok=True,
            provider=placed.provider,
            contact_name=contact_name,
            contact_phone=phone,
            call_id=placed.call_id,
        )
