"""Domain enums package."""

from heartbeat.domain.enums.language import Language

__all__ = ["Language"]
