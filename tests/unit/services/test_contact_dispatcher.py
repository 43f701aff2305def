"""
Unit Tests for Contact Dispatcher

Tests that every delivery failure becomes a result, never an exception.
"""

import pytest

from conftest import RecordingCallProvider
from heartbeat.domain.enums.language import Language
from heartbeat.domain.models.user import EmergencyContact
from heartbeat.infrastructure.telephony.provider import (
    CallAuthenticationError,
    CallProviderError,
)
from heartbeat.infrastructure.telephony.simulated_provider import SimulatedCallProvider
from heartbeat.services.alerting.contact_dispatcher import ContactDispatcher
from heartbeat.services.alerting.message_composer import compose_message

FROM_NUMBER = "+15559990000"


@pytest.fixture
def message():
    return compose_message("Alice", Language.EN)


class TestNoPhone:
    """Contacts without a phone number."""

    @pytest.mark.parametrize("phone", [None, "", "   "])
    async def test_missing_phone_fails_without_calling(self, phone, message) -> None:
        provider = RecordingCallProvider()
        dispatcher = ContactDispatcher(provider, FROM_NUMBER)

        result = await dispatcher.dispatch(EmergencyContact(name="Bob", phone=phone), message)

        assert result.ok is False
        assert result.provider == "none"
        assert result.error_detail == "No phone number"
        assert provider.calls == []

    async def test_missing_name_reported_as_unknown(self, message) -> None:
        dispatcher = ContactDispatcher(RecordingCallProvider(), FROM_NUMBER)

        result = await dispatcher.dispatch(EmergencyContact(), message, slot=1)

        assert result.contact_name == "Unknown"
        assert result.contact_slot == 1


class TestDelivery:
    """Calls handed to the provider."""

    async def test_success(self, message) -> None:
        provider = RecordingCallProvider()
        dispatcher = ContactDispatcher(provider, FROM_NUMBER)

        result = await dispatcher.dispatch(
            EmergencyContact(name="Bob", phone="+15550000001"), message, slot=2
        )

        assert result.ok is True
        assert result.provider == "twilio"
        assert result.call_id == "CA0001"
        assert result.contact_slot == 2
        assert result.contact_phone == "+15550000001"
        assert provider.calls == [("+15550000001", FROM_NUMBER, message)]

    async def test_phone_is_trimmed(self, message) -> None:
        provider = RecordingCallProvider()
        dispatcher = ContactDispatcher(provider, FROM_NUMBER)

        await dispatcher.dispatch(EmergencyContact(name="Bob", phone=" +15550000001 "), message)

        assert provider.called_numbers == ["+15550000001"]

    async def test_provider_error_becomes_failed_result(self, message) -> None:
        provider = RecordingCallProvider(
            failures={"+15550000001": CallAuthenticationError("twilio", "bad token")}
        )
        dispatcher = ContactDispatcher(provider, FROM_NUMBER)

        result = await dispatcher.dispatch(
            EmergencyContact(name="Bob", phone="+15550000001"), message
        )

        assert result.ok is False
        assert result.provider == "twilio"
        assert "Authentication failed" in result.error_detail

    async def test_generic_provider_error(self, message) -> None:
        provider = RecordingCallProvider(
            failures={"+15550000001": CallProviderError("boom", provider="twilio")}
        )
        dispatcher = ContactDispatcher(provider, FROM_NUMBER)

        result = await dispatcher.dispatch(
            EmergencyContact(name="Bob", phone="+15550000001"), message
        )

        assert result.ok is False
        assert result.error_detail == "boom"

    async def test_timeout_becomes_failed_result(self, message) -> None:
        provider = RecordingCallProvider(delay_for={"+15550000001": 5.0})
        dispatcher = ContactDispatcher(provider, FROM_NUMBER, timeout_seconds=0.05)

        result = await dispatcher.dispatch(
            EmergencyContact(name="Bob", phone="+15550000001"), message
        )

        assert result.ok is False
        assert "timed out" in result.error_detail

    async def test_simulated_provider_reports_success(self, message) -> None:
        dispatcher = ContactDispatcher(SimulatedCallProvider(), FROM_NUMBER)

        result = await dispatcher.dispatch(
            EmergencyContact(name="Bob", phone="+15550000001"), message
        )

        assert result.ok is True
        assert result.provider == "simulated"
        assert result.call_id is None

    async def test_unexpected_provider_exception_becomes_failed_result(self, message) -> None:
        provider = RecordingCallProvider(failures={"+15550000001": OSError("connection reset")})
        dispatcher = ContactDispatcher(provider, FROM_NUMBER)

        result = await dispatcher.dispatch(
            EmergencyContact(name="Bob", phone="+15550000001"), message
        )

        assert result.ok is False
        assert result.provider == "twilio"
        assert result.error_detail == "connection reset"
