"""Domain models package."""

from heartbeat.domain.models.user import User, EmergencyContact
from heartbeat.domain.models.spoken_message import SpokenMessage
from heartbeat.domain.models.dispatch import (
    DispatchResult,
    EvaluationResult,
    SweepSummary,
    PROVIDER_NONE,
    PROVIDER_SIMULATED,
)

__all__ = [
    # User models
    "User",
    "EmergencyContact",
    # Spoken message
    "SpokenMessage",
    # Dispatch models
    "DispatchResult",
    "EvaluationResult",
    "SweepSummary",
    "PROVIDER_NONE",
    "PROVIDER_SIMULATED",
]
