"""
Database ORM models package.
"""

from heartbeat.infrastructure.database.models.user_model import UserModel

__all__ = [
    "UserModel",
]
