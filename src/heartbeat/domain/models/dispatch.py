"""
Dispatch Result Models

Ephemeral records produced by alert dispatch. They are returned to
callers and logged, never persisted.

All models serialize to flat dictionaries so no provider SDK types
leak through the API.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


# Provider names reported in results that are not real call providers
PROVIDER_NONE = "none"
PROVIDER_SIMULATED = "simulated"


@dataclass
class DispatchResult:
    """
    Outcome of one attempt to notify one emergency contact.

    Attributes:
        contact_slot: 1-based position of the contact
        ok: Whether the call was placed (or simulated)
        provider: Provider name ("twilio", "simulated", "none")
        contact_name: Contact name at dispatch time
        contact_phone: Destination number at dispatch time
        call_id: Provider call identifier, when a real call was placed
        error_detail: Reason for failure, when ok is False
    """

    contact_slot: int
    ok: bool
    provider: str
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    call_id: Optional[str] = None
    error_detail: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "contact_slot": self.contact_slot,
            "ok": self.ok,
            "provider": self.provider,
            "contact_name": self.contact_name,
            "contact_phone": self.contact_phone,
            "call_id": self.call_id,
            "error_detail": self.error_detail,
        }


@dataclass
class EvaluationResult:
    """
    Outcome of an on-demand evaluation for one user.

    Attributes:
        user_id: Evaluated user
        triggered: Whether contacts were dispatched
        results: Per-contact results (empty when not triggered)
        reason: Why dispatch did or did not happen
    """

    user_id: str
    triggered: bool
    results: list[DispatchResult] = field(default_factory=list)
    reason: str = ""

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "triggered": self.triggered,
            "results": [r.to_dict() for r in self.results],
            "reason": self.reason,
        }


@dataclass
class SweepSummary:
    """
    Summary of one full pass over all users.

    Attributes:
        started_at: Sweep start (clock time)
        finished_at: Sweep end (clock time)
        scanned: Users examined
        alerted: Users with at least one contact reached
        undelivered: Overdue users whose every contact attempt failed
        skipped_not_overdue: Users who checked in recently
        skipped_cooldown: Overdue users alerted inside the cooldown window
        failed: Users skipped because of an unexpected fault
        results_by_user: Dispatch results keyed by user_id
    """

    started_at: datetime
    finished_at: Optional[datetime] = None
    scanned: int = 0
    alerted: int = 0
    undelivered: int = 0
    skipped_not_overdue: int = 0
    skipped_cooldown: int = 0
    failed: int = 0
    results_by_user: dict[str, list[DispatchResult]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "scanned": self.scanned,
            "alerted": self.alerted,
            "undelivered": self.undelivered,
            "skipped_not_overdue": self.skipped_not_overdue,
            "skipped_cooldown": self.skipped_cooldown,
            "failed": self.failed,
            "results_by_user": {
                user_id: [r.to_dict() for r in results]
                for user_id, results in self.results_by_user.items()
            },
        }
