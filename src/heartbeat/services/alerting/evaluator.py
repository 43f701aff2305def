"""
On-Demand Evaluator

Evaluates a single user immediately, outside the daily sweep.

Unlike the sweep, the evaluator ignores the alert cooldown unless
apply_cooldown is set, so an operator can re-alert an overdue user
at will.
"""

from typing import Optional

from heartbeat.config.logging_config import get_logger
from heartbeat.domain.clock import Clock, utc_now
from heartbeat.domain.exceptions import UserNotFoundError
from heartbeat.domain.models.dispatch import EvaluationResult
from heartbeat.infrastructure.database.user_store import UserStore
from heartbeat.infrastructure.metrics.prometheus_metrics import track_evaluation
from heartbeat.infrastructure.monitoring.sentry_integration import (
    capture_exception_with_context,
)
from heartbeat.services.alerting.alert_orchestrator import AlertOrchestrator
from heartbeat.services.alerting.cooldown_gate import CooldownGate
from heartbeat.services.alerting.overdue import DEFAULT_OVERDUE_DAYS, is_overdue

logger = get_logger(__name__)

REASON_NOT_OVERDUE = "not_overdue"
REASON_COOLDOWN = "cooldown"
REASON_DISPATCHED = "dispatched"
REASON_UNDELIVERED = "undelivered"


class OnDemandEvaluator:
    """Immediate evaluate-and-alert for one user."""

    def __init__(
        self,
        store: UserStore,
        orchestrator: AlertOrchestrator,
        cooldown_gate: Optional[CooldownGate] = None,
        clock: Clock = utc_now,
        timezone: str = "UTC",
        overdue_days: int = DEFAULT_OVERDUE_DAYS,
        apply_cooldown: bool = False,
    ) -> None:
        self._store = store
        self._orchestrator = orchestrator
        self._cooldown_gate = cooldown_gate or CooldownGate()
        self._clock = clock
        self._timezone = timezone
        self._overdue_days = overdue_days
        self._apply_cooldown = apply_cooldown

    async def evaluate(self, user_id: str) -> EvaluationResult:
        """
        Evaluate one user and alert their contacts if overdue.

        Args:
            user_id: User to evaluate

        Returns:
            EvaluationResult

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = await self._store.get(user_id)
        if user is None:
            track_evaluation("not_found")
            raise UserNotFoundError(user_id)

        now = self._clock()

        if not is_overdue(user.last_checkin_date, now, self._timezone, self._overdue_days):
            track_evaluation(REASON_NOT_OVERDUE)
            return EvaluationResult(
                user_id=user_id,
                triggered=False,
                reason=REASON_NOT_OVERDUE,
            )

        if self._apply_cooldown and not self._cooldown_gate.permits(user.last_alert_at, now):
            track_evaluation(REASON_COOLDOWN)
            logger.info("On-demand evaluation denied by cooldown", user_id=user_id)
            return EvaluationResult(
                user_id=user_id,
                triggered=False,
                reason=REASON_COOLDOWN,
            )

        logger.warning("On-demand evaluation triggered alert", user_id=user_id)

        results = await self._orchestrator.dispatch_all(user)

        if any(r.ok for r in results):
            reason = REASON_DISPATCHED
            track_evaluation("triggered")
            try:
                await self._store.record_alert(user_id, now)
            except Exception as e:
                # calls already went out; report them rather than fail the request
                logger.exception(
                    "Failed to record alert time",
                    user_id=user_id,
                    error_type=type(e).__name__,
                )
                capture_exception_with_context(
                    e, user_id=user_id, extra={"stage": "record_alert"}
                )
        else:
            reason = REASON_UNDELIVERED
            track_evaluation(REASON_UNDELIVERED)
            logger.error("No emergency contact could be reached", user_id=user_id)

        return EvaluationResult(
            user_id=user_id,
            triggered=True,
            results=results,
            reason=reason,
        )
