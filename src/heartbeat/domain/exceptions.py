"""
Domain exceptions.

Only conditions the caller must act on are raised. Per-contact
dispatch failures are reported as DispatchResult records instead.
"""


class HeartbeatError(Exception):
    """Base exception for Heartbeat domain errors."""


class UserNotFoundError(HeartbeatError):
    """Requested user does not exist in the user store."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id
