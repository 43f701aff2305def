"""
Unit Tests for Call Provider Factory
"""

from pydantic import SecretStr

from heartbeat.config.settings import TelephonySettings
from heartbeat.infrastructure.telephony import (
    CallProviderType,
    SimulatedCallProvider,
    get_call_provider,
)
from heartbeat.infrastructure.telephony.provider_factory import resolve_provider_type
from heartbeat.infrastructure.telephony.twilio_provider import TwilioCallProvider


def _with_telephony(settings, **kwargs):
    return settings.model_copy(update={"telephony": TelephonySettings(**kwargs)})


class TestProviderSelection:
    """Real calls only with complete credentials."""

    def test_missing_credentials_selects_simulated(self, test_settings) -> None:
        settings = _with_telephony(test_settings, account_sid="", from_number="+15559990000")

        assert resolve_provider_type(settings) == CallProviderType.SIMULATED
        assert isinstance(get_call_provider(settings), SimulatedCallProvider)

    def test_missing_from_number_selects_simulated(self, test_settings) -> None:
        settings = _with_telephony(
            test_settings,
            account_sid="AC1",
            auth_token=SecretStr("token"),
            from_number="",
        )

        assert resolve_provider_type(settings) == CallProviderType.SIMULATED

    def test_complete_credentials_select_twilio(self, test_settings) -> None:
        settings = _with_telephony(
            test_settings,
            account_sid="AC1",
            auth_token=SecretStr("token"),
            from_number="+15559990000",
        )

        provider = get_call_provider(settings)

        assert isinstance(provider, TwilioCallProvider)
        assert provider.provider_name == "twilio"
        assert provider.is_configured() is True

    def test_explicit_type_overrides_settings(self, test_settings) -> None:
        provider = get_call_provider(test_settings, provider_type=CallProviderType.SIMULATED)

        assert provider.provider_name == "simulated"
        assert provider.is_configured() is False


class TestSimulatedProvider:
    """Null-object behaviour."""

    async def test_reports_simulated_success(self) -> None:
        from heartbeat.domain.enums.language import Language
        from heartbeat.services.alerting.message_composer import compose_message

        placed = await SimulatedCallProvider().place_call(
            "+15550000001", "", compose_message("Alice", Language.EN)
        )

        assert placed.provider == "simulated"
        assert placed.call_id is None
        assert placed.status == "simulated"

    async def test_always_healthy(self) -> None:
        assert await SimulatedCallProvider().health_check() is True
