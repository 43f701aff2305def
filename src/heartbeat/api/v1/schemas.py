"""
API Schemas

Pydantic models shared by several v1 endpoints.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from heartbeat.domain.models.dispatch import DispatchResult
from heartbeat.domain.models.user import User


class ContactView(BaseModel):
    """Emergency contact as returned by the API."""

    name: Optional[str] = None
    phone: Optional[str] = None


class UserView(BaseModel):
    """User as returned by the API."""

    user_id: str
    username: Optional[str] = None
    call_name: Optional[str] = None
    email: Optional[str] = None
    language: str
    last_checkin_date: Optional[date] = None
    last_alert_at: Optional[datetime] = None
    emergency_contact: ContactView
    emergency_contact2: ContactView
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls.model_validate(user.to_dict())


class DispatchResultView(BaseModel):
    """Outcome of one contact dispatch."""

    contact_slot: int
    ok: bool
    provider: str
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    call_id: Optional[str] = None
    error_detail: Optional[str] = None

    @classmethod
    def from_result(cls, result: DispatchResult) -> "DispatchResultView":
        return cls.model_validate(result.to_dict())


class UserIdRequest(BaseModel):
    """Request body carrying only a user ID."""

    user_id: str = Field(..., min_length=1, max_length=128, description="User ID")
