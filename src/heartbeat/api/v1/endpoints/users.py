"""
User Endpoints

Registration of a user with their emergency contacts, and updates
to the name spoken in alert calls.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from heartbeat.api.dependencies import get_user_store
from heartbeat.api.v1.schemas import UserView
from heartbeat.config.logging_config import get_logger
from heartbeat.domain.clock import utc_now
from heartbeat.domain.enums.language import Language
from heartbeat.domain.models.user import EmergencyContact, User
from heartbeat.infrastructure.database.user_store import UserStore

logger = get_logger(__name__)
router = APIRouter()


# Request/Response Models

class PrimaryContactRequest(BaseModel):
    """First emergency contact; both fields are required."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=120)
    phone: str = Field(..., min_length=3, max_length=32, description="E.164 phone number")


class SecondaryContactRequest(BaseModel):
    """Second emergency contact; may be left empty."""

    name: Optional[str] = Field(default=None, max_length=120)
    phone: Optional[str] = Field(default=None, max_length=32)


class RegisterRequest(BaseModel):
    """Register a user or replace their contacts."""

    user_id: str = Field(..., min_length=1, max_length=128, description="User ID")
    emergency_contact: PrimaryContactRequest
    emergency_contact2: Optional[SecondaryContactRequest] = None
    call_name: Optional[str] = Field(default=None, max_length=120)
    username: Optional[str] = Field(default=None, max_length=120)
    email: Optional[str] = Field(default=None, max_length=255)
    language: Optional[Language] = None

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "ios-7f3a",
                "call_name": "Alice",
                "language": "en",
                "emergency_contact": {"name": "Bob", "phone": "+15551230001"},
                "emergency_contact2": {"name": "Carol", "phone": "+15551230002"},
            }
        }


class CallNameRequest(BaseModel):
    """Change the name spoken in alert calls."""

    user_id: str = Field(..., min_length=1, max_length=128)
    call_name: str = Field(..., max_length=120)


class UserResponse(BaseModel):
    ok: bool = True
    message: str
    user: UserView


def _strip(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


@router.post(
    "/register",
    response_model=UserResponse,
    summary="Register a user and their emergency contacts",
)
async def register_user(
    request: RegisterRequest,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    """
    Create or update a user.

    Re-registering replaces the contacts and keeps check-in and alert
    history. Fields omitted from the request keep their stored value.
    """
    existing = await store.get(request.user_id)

    if request.emergency_contact2 is not None:
        contact2 = EmergencyContact(
            name=_strip(request.emergency_contact2.name),
            phone=_strip(request.emergency_contact2.phone),
        )
    elif existing is not None:
        contact2 = existing.emergency_contact2
    else:
        contact2 = EmergencyContact()

    user = User(
        user_id=request.user_id,
        username=_strip(request.username) if request.username is not None
        else (existing.username if existing else None),
        call_name=_strip(request.call_name) if request.call_name is not None
        else (existing.call_name if existing else None),
        email=_strip(request.email) if request.email is not None
        else (existing.email if existing else None),
        language=request.language or (existing.language if existing else Language.EN),
        last_checkin_date=existing.last_checkin_date if existing else None,
        last_alert_at=existing.last_alert_at if existing else None,
        emergency_contact=EmergencyContact(
            name=request.emergency_contact.name.strip(),
            phone=request.emergency_contact.phone.strip(),
        ),
        emergency_contact2=contact2,
        updated_at=utc_now(),
    )

    await store.save_profile(user)

    logger.info(
        "User registered",
        user_id=user.user_id,
        created=existing is None,
        contacts_with_phone=sum(1 for c in user.emergency_contacts if c.has_phone),
    )

    return UserResponse(
        message="User registered" if existing is None else "User updated",
        user=UserView.from_user(user),
    )


@router.post(
    "/call-name",
    response_model=UserResponse,
    summary="Update the name spoken in alert calls",
)
async def update_call_name(
    request: CallNameRequest,
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    user = await store.get(request.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    call_name = request.call_name.strip()
    if not call_name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="call_name is required",
        )

    user.call_name = call_name
    user.updated_at = utc_now()
    await store.save_profile(user)

    logger.info("Call name updated", user_id=user.user_id)

    return UserResponse(message="Call name updated", user=UserView.from_user(user))
