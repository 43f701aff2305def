"""
Alerting Service Wiring

Builds the alerting object graph from settings. Used by the
application lifespan; tests build the same graph around fakes.
"""

from dataclasses import dataclass
from typing import Optional

from heartbeat.config.settings import Settings
from heartbeat.domain.clock import Clock, utc_now
from heartbeat.infrastructure.database.user_store import UserStore
from heartbeat.infrastructure.telephony.provider import CallProvider
from heartbeat.services.alerting.alert_orchestrator import AlertOrchestrator
from heartbeat.services.alerting.contact_dispatcher import ContactDispatcher
from heartbeat.services.alerting.cooldown_gate import CooldownGate
from heartbeat.services.alerting.evaluator import OnDemandEvaluator
from heartbeat.services.alerting.scheduler import SweepScheduler
from heartbeat.services.alerting.sweep import EmergencySweep


@dataclass
class AlertingServices:
    """Alerting components sharing one store, provider and clock."""

    store: UserStore
    provider: CallProvider
    orchestrator: AlertOrchestrator
    sweep: EmergencySweep
    evaluator: OnDemandEvaluator
    scheduler: Optional[SweepScheduler] = None


def build_alerting_services(
    settings: Settings,
    store: UserStore,
    provider: CallProvider,
    clock: Clock = utc_now,
    with_scheduler: Optional[bool] = None,
) -> AlertingServices:
    """
    Assemble dispatcher, orchestrator, sweep, evaluator and scheduler.

    Args:
        settings: Application settings
        store: User store
        provider: Call provider chosen at startup
        clock: Time source for overdue and cooldown decisions
        with_scheduler: Force the scheduler on or off
            (defaults to settings.alerts.sweep_enabled)
    """
    alerts = settings.alerts

    dispatcher = ContactDispatcher(
        provider,
        from_number=settings.telephony.from_number,
        timeout_seconds=settings.telephony.request_timeout_seconds,
    )
    orchestrator = AlertOrchestrator(dispatcher)
    cooldown_gate = CooldownGate(alerts.cooldown_hours)

    sweep = EmergencySweep(
        store,
        orchestrator,
        cooldown_gate,
        clock=clock,
        timezone=alerts.timezone,
        overdue_days=alerts.overdue_days,
    )
    evaluator = OnDemandEvaluator(
        store,
        orchestrator,
        cooldown_gate,
        clock=clock,
        timezone=alerts.timezone,
        overdue_days=alerts.overdue_days,
        apply_cooldown=alerts.on_demand_respects_cooldown,
    )

    if with_scheduler is None:
        with_scheduler = alerts.sweep_enabled

    scheduler = None
    if with_scheduler:
        scheduler = SweepScheduler(
            sweep,
            hour=alerts.sweep_hour,
            minute=alerts.sweep_minute,
            timezone=alerts.timezone,
        )

    return AlertingServices(
        store=store,
        provider=provider,
        orchestrator=orchestrator,
        sweep=sweep,
        evaluator=evaluator,
        scheduler=scheduler,
    )
