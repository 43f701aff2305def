"""
Cooldown Gate

Limits how often one user's contacts can be called by the sweep.
"""

from datetime import datetime, timedelta
from typing import Optional

from heartbeat.domain.clock import ensure_aware

DEFAULT_COOLDOWN_HOURS = 24.0


class CooldownGate:
    """
    Permits an alert only when the previous one is old enough.

    A user who was never alerted is always permitted. Timestamps in the
    future (clock skew) count as recent and deny the alert.
    """

    def __init__(self, cooldown_hours: float = DEFAULT_COOLDOWN_HOURS) -> None:
        if cooldown_hours < 0:
            raise ValueError("cooldown_hours must be non-negative")
        self._window = timedelta(hours=cooldown_hours)

    @property
    def cooldown_hours(self) -> float:
        return self._window.total_seconds() / 3600

    def hours_since(self, last_alert_at: Optional[datetime], now: datetime) -> Optional[float]:
        """Hours elapsed since the last alert, None if never alerted."""
        if last_alert_at is None:
            return None
        delta = ensure_aware(now) - ensure_aware(last_alert_at)
        return delta.total_seconds() / 3600

    def permits(self, last_alert_at: Optional[datetime], now: datetime) -> bool:
        if last_alert_at is None:
            return True
        return ensure_aware(now) - ensure_aware(last_alert_at) >= self._window
