"""
Repository pattern implementations package.
"""

from heartbeat.infrastructure.database.repositories.base import BaseRepository
from heartbeat.infrastructure.database.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
]
