"""
User Database Model

SQLAlchemy ORM model for user persistence.

Emergency contacts are stored as flat column pairs
(contact_name/contact_phone for slot 1, *_2 for slot 2).
"""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from heartbeat.infrastructure.database.connection import Base


class UserModel(Base):
    """
    User table ORM model.

    Table: users
    """

    __tablename__ = "users"

    # Primary key
    user_id: Mapped[str] = mapped_column(
        String(128),
        primary_key=True,
        doc="Stable user identifier"
    )

    # Identity
    username: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    call_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Name spoken in alert calls"
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )

    # Emergency contacts
    contact_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    contact_name2: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone2: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    # Alerting state
    last_checkin_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        doc="Calendar day of the latest check-in"
    )
    last_alert_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        doc="Latest alert dispatch (monotonic)"
    )
    language: Mapped[str] = mapped_column(
        String(8),
        default="en",
        server_default="en",
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
        doc="Last update timestamp"
    )

    def __repr__(self) -> str:
        return f"<UserModel(user_id='{self.user_id}')>"
