"""
Call Provider Abstract Interface

Defines the contract for all outbound call provider implementations.
The dispatcher depends on this interface only.

ARCHITECTURE: Whether real calls are placed is decided once at
startup by choosing the implementation (see provider_factory).
The simulated provider is a null object with the same interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from heartbeat.domain.models.spoken_message import SpokenMessage


@dataclass
class PlacedCall:
    """
    Provider acknowledgement of a submitted call.

    Attributes:
        provider: Provider name
        call_id: Provider call identifier (None for simulated calls)
        status: Provider-reported initial status
    """

    provider: str
    call_id: Optional[str] = None
    status: str = "queued"


class CallProvider(ABC):
    """
    Abstract outbound call provider.

    Implementations must raise CallProviderError (or a subclass) for
    every failure so the dispatcher can report it as a result.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get provider name for logging and results."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Check if the provider can place real calls.

        Returns:
            True if credentials and caller ID are configured
        """
        pass

    @abstractmethod
    async def place_call(
        self,
        to: str,
        from_: str,
        message: SpokenMessage,
    ) -> PlacedCall:
        """
        Place an outbound voice call.

        Args:
            to: Destination phone number
            from_: Caller ID
            message: Message to speak

        Returns:
            PlacedCall acknowledgement

        Raises:
            CallProviderError: On network, auth or quota errors
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check provider availability.

        Returns:
            True if provider is reachable
        """
        pass


class CallProviderError(Exception):
    """Base exception for call provider errors."""

    def __init__(
        self,
        message: str,
        provider: str,
        is_retryable: bool = False,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.is_retryable = is_retryable
        self.original_error = original_error


class CallAuthenticationError(CallProviderError):
    """Provider rejected the credentials."""

    def __init__(self, provider: str, detail: str = "") -> None:
        super().__init__(
            f"Authentication failed for {provider}: {detail}".rstrip(": "),
            provider=provider,
            is_retryable=False,
        )


class CallRateLimitError(CallProviderError):
    """Provider quota or rate limit exceeded."""

    def __init__(
        self,
        provider: str,
        retry_after_seconds: Optional[int] = None,
    ) -> None:
        super().__init__(
            f"Rate limit exceeded for {provider}",
            provider=provider,
            is_retryable=True,
        )
        self.retry_after_seconds = retry_after_seconds
