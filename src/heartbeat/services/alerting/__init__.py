"""
Alerting services.

Overdue detection, alert composition, contact dispatch, the daily
sweep and on-demand evaluation.
"""

from heartbeat.services.alerting.overdue import is_overdue, days_since_checkin, local_day
from heartbeat.services.alerting.message_composer import compose_message, escape_for_xml
from heartbeat.services.alerting.contact_dispatcher import ContactDispatcher
from heartbeat.services.alerting.alert_orchestrator import AlertOrchestrator
from heartbeat.services.alerting.cooldown_gate import CooldownGate
from heartbeat.services.alerting.sweep import EmergencySweep
from heartbeat.services.alerting.scheduler import SweepScheduler
from heartbeat.services.alerting.evaluator import OnDemandEvaluator
from heartbeat.services.alerting.wiring import AlertingServices, build_alerting_services

__all__ = [
    "is_overdue",
    "days_since_checkin",
    "local_day",
    "compose_message",
    "escape_for_xml",
    "ContactDispatcher",
    "AlertOrchestrator",
    "CooldownGate",
    "EmergencySweep",
    "SweepScheduler",
    "OnDemandEvaluator",
    "AlertingServices",
    "build_alerting_services",
]
