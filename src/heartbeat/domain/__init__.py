"""
Heartbeat Domain Layer

Core business entities and value objects.
These models represent the domain logic independent of infrastructure.
"""

from heartbeat.domain.models.user import User, EmergencyContact
from heartbeat.domain.models.dispatch import DispatchResult, EvaluationResult, SweepSummary
from heartbeat.domain.enums.language import Language
from heartbeat.domain.exceptions import HeartbeatError, UserNotFoundError

__all__ = [
    # User
    "User",
    "EmergencyContact",
    # Dispatch
    "DispatchResult",
    "EvaluationResult",
    "SweepSummary",
    # Enums
    "Language",
    # Errors
    "HeartbeatError",
    "UserNotFoundError",
]
