"""
Emergency Sweep

One pass over every user: alert the contacts of each overdue user
whose cooldown has elapsed.

ARCHITECTURE: A sweep is Idle or Running. Only one runs at a time;
a trigger that arrives while a sweep is running is dropped, not
queued. A fault while handling one user is logged and counted and the
sweep moves on to the next user.
"""

import asyncio
import time
from typing import Optional

from heartbeat.config.logging_config import get_logger, user_log_scope
from heartbeat.domain.clock import Clock, utc_now
from heartbeat.domain.models.dispatch import SweepSummary
from heartbeat.domain.models.user import User
from heartbeat.infrastructure.database.user_store import UserStore
from heartbeat.infrastructure.metrics.prometheus_metrics import (
    track_sweep,
    track_sweep_user,
)
from heartbeat.infrastructure.monitoring.sentry_integration import (
    capture_exception_with_context,
)
from heartbeat.services.alerting.alert_orchestrator import AlertOrchestrator
from heartbeat.services.alerting.cooldown_gate import CooldownGate
from heartbeat.services.alerting.overdue import DEFAULT_OVERDUE_DAYS, is_overdue

logger = get_logger(__name__)


class EmergencySweep:
    """
    Periodic evaluation of all users.

    Usage:
        sweep = EmergencySweep(store, orchestrator, CooldownGate())
        summary = await sweep.run_once()
    """

    def __init__(
        self,
        store: UserStore,
        orchestrator: AlertOrchestrator,
        cooldown_gate: Optional[CooldownGate] = None,
        clock: Clock = utc_now,
        timezone: str = "UTC",
        overdue_days: int = DEFAULT_OVERDUE_DAYS,
    ) -> None:
        self._store = store
        self._orchestrator = orchestrator
        self._cooldown_gate = cooldown_gate or CooldownGate()
        self._clock = clock
        self._timezone = timezone
        self._overdue_days = overdue_days
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run_once(self) -> Optional[SweepSummary]:
        """
        Run one sweep.

        Returns:
            SweepSummary, or None if a sweep was already running
        """
        if self._lock.locked():
            logger.warning("Sweep already running, trigger dropped")
            track_sweep("dropped")
            return None

        async with self._lock:
            return await self._sweep()

    async def _sweep(self) -> SweepSummary:
        summary = SweepSummary(started_at=self._clock())
        start = time.monotonic()

        logger.info("Emergency sweep started")

        try:
            users = await self._store.get_all()
        except Exception as e:
            logger.error(
                "Failed to load users for sweep",
                error=str(e),
                error_type=type(e).__name__,
            )
            capture_exception_with_context(e, extra={"stage": "load_users"})
            track_sweep("store_unavailable", time.monotonic() - start)
            summary.finished_at = self._clock()
            return summary

        for user in users:
            summary.scanned += 1
            try:
                with user_log_scope(user.user_id):
                    await self._process_user(user, summary)
            except Exception as e:
                summary.failed += 1
                track_sweep_user("failed")
                logger.exception(
                    "Sweep failed for user",
                    user_id=user.user_id,
                    error_type=type(e).__name__,
                )
                capture_exception_with_context(e, user_id=user.user_id)

        summary.finished_at = self._clock()
        track_sweep("completed", time.monotonic() - start)

        logger.info(
            "Emergency sweep complete",
            result=f"alerted {summary.alerted} of {summary.scanned} users",
            alerted=summary.alerted,
            scanned=summary.scanned,
            undelivered=summary.undelivered,
            skipped_not_overdue=summary.skipped_not_overdue,
            skipped_cooldown=summary.skipped_cooldown,
            failed=summary.failed,
        )

        return summary

    async def _process_user(self, user: User, summary: SweepSummary) -> None:
        now = self._clock()

        if not is_overdue(user.last_checkin_date, now, self._timezone, self._overdue_days):
            summary.skipped_not_overdue += 1
            track_sweep_user("not_overdue")
            return

        if not self._cooldown_gate.permits(user.last_alert_at, now):
            summary.skipped_cooldown += 1
            track_sweep_user("cooldown")
            logger.info(
                "Skipping user inside alert cooldown",
                user_id=user.user_id,
                hours_since_alert=round(
                    self._cooldown_gate.hours_since(user.last_alert_at, now), 1
                ),
            )
            return

        logger.warning(
            "User overdue, alerting emergency contacts",
            user_id=user.user_id,
            last_checkin_date=(
                user.last_checkin_date.isoformat() if user.last_checkin_date else None
            ),
        )

        results = await self._orchestrator.dispatch_all(user)
        summary.results_by_user[user.user_id] = results

        if not any(r.ok for r in results):
            summary.undelivered += 1
            track_sweep_user("undelivered")
            logger.error("No emergency contact could be reached", user_id=user.user_id)
            return

        await self._store.record_alert(user.user_id, now)
        summary.alerted += 1
        track_sweep_user("alerted")
