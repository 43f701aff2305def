"""
Check-in Endpoints

Daily check-in and status lookup. A check-in stamps today's date
in the reference timezone; status reports whether the user is
currently overdue.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from heartbeat.api.dependencies import get_app_settings, get_clock, get_user_store
from heartbeat.api.v1.schemas import UserIdRequest, UserView
from heartbeat.config import Settings
from heartbeat.config.logging_config import get_logger
from heartbeat.domain.clock import Clock
from heartbeat.infrastructure.database.user_store import UserStore
from heartbeat.services.alerting.overdue import is_overdue, local_day

logger = get_logger(__name__)
router = APIRouter()


class CheckinResponse(BaseModel):
    ok: bool = True
    message: str
    user: UserView


class StatusResponse(BaseModel):
    ok: bool = True
    user: UserView
    emergency_should_trigger: bool


@router.post(
    "/checkin",
    response_model=CheckinResponse,
    summary="Record today's check-in",
)
async def checkin(
    request: UserIdRequest,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
    clock: Clock = Depends(get_clock),
) -> CheckinResponse:
    today = local_day(clock(), settings.alerts.timezone)

    if not await store.record_checkin(request.user_id, today):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found. Register first.",
        )

    user = await store.get(request.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found. Register first.",
        )

    logger.info("Check-in recorded", user_id=request.user_id, day=today.isoformat())

    return CheckinResponse(message="Check-in successful", user=UserView.from_user(user))


@router.get(
    "/status/{user_id}",
    response_model=StatusResponse,
    summary="Get a user's check-in status",
)
async def get_status(
    user_id: str,
    store: UserStore = Depends(get_user_store),
    settings: Settings = Depends(get_app_settings),
    clock: Clock = Depends(get_clock),
) -> StatusResponse:
    user = await store.get(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return StatusResponse(
        user=UserView.from_user(user),
        emergency_should_trigger=is_overdue(
            user.last_checkin_date,
            clock(),
            settings.alerts.timezone,
            settings.alerts.overdue_days,
        ),
    )
