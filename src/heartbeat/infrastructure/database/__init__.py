"""
Database infrastructure components.
"""

from heartbeat.infrastructure.database.connection import Base, DatabaseManager
from heartbeat.infrastructure.database.user_store import UserStore, SqlUserStore

__all__ = [
    "Base",
    "DatabaseManager",
    "UserStore",
    "SqlUserStore",
]
