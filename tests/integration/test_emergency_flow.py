"""
Integration Tests - Emergency Flow

End-to-end scenarios through sweep, evaluator, orchestrator,
dispatcher and provider, over the in-memory store.
"""

import pytest

from conftest import FixedClock, InMemoryUserStore, RecordingCallProvider, make_user, NOW
from heartbeat.infrastructure.telephony.provider import CallAuthenticationError
from heartbeat.infrastructure.telephony.simulated_provider import SimulatedCallProvider
from heartbeat.services.alerting.wiring import build_alerting_services

pytestmark = pytest.mark.integration


class TestEmergencyFlowIntegration:
    """Scenarios across the whole alerting path."""

    async def test_unconfigured_provider_simulates_both_contacts(self, test_settings) -> None:
        """Overdue user, no call credentials: sweep alerts with simulated calls."""
        store = InMemoryUserStore([make_user("alice", checkin_days_ago=3)])
        services = build_alerting_services(
            test_settings, store, SimulatedCallProvider(), clock=FixedClock(NOW)
        )

        summary = await services.sweep.run_once()

        results = summary.results_by_user["alice"]
        assert summary.alerted == 1
        assert [r.provider for r in results] == ["simulated", "simulated"]
        assert all(r.ok for r in results)
        assert store.peek("alice").last_alert_at == NOW

    async def test_auth_failure_on_first_contact_still_alerts(self, test_settings) -> None:
        """Partial success counts as alerted."""
        provider = RecordingCallProvider(
            failures={"+15550000001": CallAuthenticationError("twilio", "invalid token")}
        )
        store = InMemoryUserStore([make_user("alice", checkin_days_ago=3)])
        services = build_alerting_services(test_settings, store, provider, clock=FixedClock(NOW))

        summary = await services.sweep.run_once()

        results = summary.results_by_user["alice"]
        assert [(r.contact_slot, r.ok) for r in results] == [(1, False), (2, True)]
        assert store.peek("alice").last_alert_at == NOW

    async def test_repeated_evaluation_of_healthy_user_is_idempotent(
        self, test_settings, provider
    ) -> None:
        user = make_user("alice", checkin_days_ago=0)
        store = InMemoryUserStore([user])
        services = build_alerting_services(test_settings, store, provider, clock=FixedClock(NOW))

        first = await services.evaluator.evaluate("alice")
        second = await services.evaluator.evaluate("alice")

        assert first.triggered is False
        assert second.triggered is False
        assert store.alert_writes == []
        assert store.peek("alice").to_dict() == user.to_dict()
        assert provider.calls == []

    async def test_daily_cycle(self, test_settings, provider) -> None:
        """Alert, cooldown the same day, re-alert the next day, stop after check-in."""
        clock = FixedClock(NOW)
        store = InMemoryUserStore([make_user("alice", checkin_days_ago=2)])
        services = build_alerting_services(test_settings, store, provider, clock=clock)

        assert (await services.sweep.run_once()).alerted == 1

        clock.advance(hours=6)
        assert (await services.sweep.run_once()).skipped_cooldown == 1

        clock.advance(hours=18)
        assert (await services.sweep.run_once()).alerted == 1
        assert store.peek("alice").last_alert_at == clock.now

        await store.record_checkin("alice", clock.now.date())
        clock.advance(days=1)
        assert (await services.sweep.run_once()).skipped_not_overdue == 1

        assert len(provider.calls) == 4

    async def test_on_demand_after_sweep_bypasses_cooldown(self, test_settings, provider) -> None:
        clock = FixedClock(NOW)
        store = InMemoryUserStore([make_user("alice", checkin_days_ago=3)])
        services = build_alerting_services(test_settings, store, provider, clock=clock)

        await services.sweep.run_once()
        clock.advance(minutes=10)
        result = await services.evaluator.evaluate("alice")

        assert result.triggered is True
        assert store.peek("alice").last_alert_at == clock.now

    async def test_chinese_user_gets_chinese_call(self, test_settings, provider) -> None:
        store = InMemoryUserStore([make_user("li", language="zh", call_name="小李")])
        services = build_alerting_services(test_settings, store, provider, clock=FixedClock(NOW))

        await services.sweep.run_once()

        message = provider.calls[0][2]
        assert message.voice_locale == "zh-CN"
        assert "小李" in message.to_twiml()
