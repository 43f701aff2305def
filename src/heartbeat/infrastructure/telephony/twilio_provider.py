"""
Twilio Call Provider

Implementation of the call provider interface for Twilio Programmable Voice.
Includes request timeouts, rate-limit retries, and error mapping.

The Twilio SDK is synchronous; calls run in a worker thread so the
event loop (and the scheduler) stay responsive.
"""

import asyncio
from typing import Optional

from requests.exceptions import RequestException
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from heartbeat.config import get_settings
from heartbeat.config.logging_config import get_logger, mask_phone
from heartbeat.domain.models.spoken_message import SpokenMessage
from heartbeat.infrastructure.telephony.provider import (
    CallAuthenticationError,
    CallProvider,
    CallProviderError,
    CallRateLimitError,
    PlacedCall,
)

logger = get_logger(__name__)


class TwilioCallProvider(CallProvider):
    """
    Twilio voice call provider.

    Only rate-limit responses are retried. Any other failure may mean
    the call was already created, and retrying would ring the contact twice.

    Usage:
        provider = TwilioCallProvider()
        placed = await provider.place_call("+15550001111", "+15550002222", message)
    """

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        client: Optional[Client] = None,
    ) -> None:
        """
        Initialize Twilio provider.

        Args:
            account_sid: Twilio account SID (defaults to settings)
            auth_token: Twilio auth token (defaults to settings)
            timeout_seconds: HTTP request timeout (defaults to settings)
            client: Pre-built Twilio client (tests)
        """
        settings = get_settings()

        self._account_sid = account_sid or settings.telephony.account_sid
        self._auth_token = auth_token or settings.telephony.auth_token.get_secret_value()
        self._timeout = timeout_seconds or settings.telephony.request_timeout_seconds
        self._client: Optional[Client] = client

    @property
    def provider_name(self) -> str:
        return "twilio"

    def is_configured(self) -> bool:
        """Check if credentials are configured."""
        return bool(self._account_sid and self._auth_token)

    def _get_client(self) -> Client:
        """Get or create the Twilio REST client."""
        if self._client is None:
            self._client = Client(
                self._account_sid,
                self._auth_token,
                http_client=TwilioHttpClient(timeout=self._timeout),
            )
        return self._client

    async def place_call(
        self,
        to: str,
        from_: str,
        message: SpokenMessage,
    ) -> PlacedCall:
        """
        Place a call that speaks the message as TwiML.

        Raises:
            CallProviderError: On any Twilio or transport failure
        """
        if not self.is_configured():
            raise CallProviderError(
                "Twilio credentials not configured",
                provider=self.provider_name,
            )

        twiml = message.to_twiml()
        call_sid = await asyncio.to_thread(self._create_call, to, from_, twiml)

        logger.info(
            "Twilio call placed",
            to=mask_phone(to),
            call_sid=call_sid,
        )
        return PlacedCall(provider=self.provider_name, call_id=call_sid)

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(CallRateLimitError),
        reraise=True,
    )
    def _create_call(self, to: str, from_: str, twiml: str) -> str:
        """Submit the call (blocking). Returns the call SID."""
        try:
            call = self._get_client().calls.create(to=to, from_=from_, twiml=twiml)
            return call.sid

        except TwilioRestException as e:
            if e.status in (401, 403):
                logger.error("Twilio authentication failed", code=e.code)
                raise CallAuthenticationError(self.provider_name, detail=str(e.msg))
            if e.status == 429:
                logger.warning("Twilio rate limit hit", code=e.code)
                raise CallRateLimitError(self.provider_name)
            logger.error("Twilio API error", status=e.status, code=e.code)
            raise CallProviderError(
                f"Twilio API error {e.status}: {e.msg}",
                provider=self.provider_name,
                original_error=e,
            )

        except (TwilioException, RequestException) as e:
            logger.error("Twilio transport error", error=str(e))
            raise CallProviderError(
                f"Twilio request failed: {e}",
                provider=self.provider_name,
                original_error=e,
            )

    async def health_check(self) -> bool:
        """Check Twilio account reachability."""
        if not self.is_configured():
            return False

        try:
            client = self._get_client()
            await asyncio.to_thread(
                lambda: client.api.v2010.accounts(self._account_sid).fetch()
            )
            return True
        except (TwilioException, RequestException) as e:
            logger.warning("Twilio health check failed", error=str(e))
            return False
