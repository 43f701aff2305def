"""
User Domain Model

Represents a Heartbeat user: the person who checks in, and the
emergency contacts who are called when they stop checking in.

PRIVACY: Contact phone numbers are personal data of third parties.
Log them masked (see mask_phone) and never ship them to error tracking.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from heartbeat.domain.clock import ensure_aware, utc_now
from heartbeat.domain.enums.language import Language


@dataclass
class EmergencyContact:
    """
    A person to call when the user is overdue.

    Both fields are optional so a partially registered user can be
    stored; a contact without a phone cannot be called.
    """

    name: Optional[str] = None
    phone: Optional[str] = None

    @property
    def has_phone(self) -> bool:
        """Whether a phone number is configured for this contact."""
        return bool(self.phone and self.phone.strip())

    def to_dict(self) -> dict:
        return {"name": self.name, "phone": self.phone}


@dataclass
class User:
    """
    Core user entity.

    Attributes:
        user_id: Unique user identifier, stable for the user's lifetime
        username: Account name
        call_name: Name spoken in alert calls (preferred over username)
        email: Account e-mail (not used by alerting)
        language: Locale for spoken alerts
        last_checkin_date: Calendar day of the latest check-in (None = never)
        last_alert_at: Time of the latest alert dispatch (None = never)
        emergency_contact: Contact slot 1
        emergency_contact2: Contact slot 2 (optional, independent of slot 1)
        updated_at: Last modification timestamp
    """

    user_id: str
    username: Optional[str] = None
    call_name: Optional[str] = None
    email: Optional[str] = None
    language: Language = Language.EN
    last_checkin_date: Optional[date] = None
    last_alert_at: Optional[datetime] = None
    emergency_contact: EmergencyContact = field(default_factory=EmergencyContact)
    emergency_contact2: EmergencyContact = field(default_factory=EmergencyContact)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        """Normalize loosely typed values."""
        if not self.user_id:
            raise ValueError("user_id is required")
        self.language = Language.parse(self.language)
        if self.last_alert_at is not None:
            self.last_alert_at = ensure_aware(self.last_alert_at)

    @property
    def display_name(self) -> Optional[str]:
        """
        Name to speak in alert calls.

        Falls back from call_name to username. Returns None when
        neither is set so the composer can pick a generic phrase.
        """
        for candidate in (self.call_name, self.username):
            if candidate and candidate.strip():
                return candidate.strip()
        return None

    @property
    def emergency_contacts(self) -> list[EmergencyContact]:
        """Emergency contacts in slot order (slot 1 first)."""
        return [self.emergency_contact, self.emergency_contact2]

    def to_dict(self) -> dict:
        """Serialize user to dictionary (API representation)."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "call_name": self.call_name,
            "email": self.email,
            "language": self.language.value,
            "last_checkin_date": self.last_checkin_date.isoformat() if self.last_checkin_date else None,
            "last_alert_at": self.last_alert_at.isoformat() if self.last_alert_at else None,
            "emergency_contact": self.emergency_contact.to_dict(),
            "emergency_contact2": self.emergency_contact2.to_dict(),
            "updated_at": self.updated_at.isoformat(),
        }
