"""
Alert Endpoints

Operator triggers: evaluate one user now, or run a full sweep now.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from heartbeat.api.dependencies import get_evaluator, get_sweep
from heartbeat.api.v1.schemas import DispatchResultView, UserIdRequest
from heartbeat.config.logging_config import get_logger
from heartbeat.domain.exceptions import UserNotFoundError
from heartbeat.services.alerting.evaluator import OnDemandEvaluator
from heartbeat.services.alerting.sweep import EmergencySweep

logger = get_logger(__name__)
router = APIRouter()


class EvaluateResponse(BaseModel):
    ok: bool = True
    user_id: str
    triggered: bool
    reason: str
    results: list[DispatchResultView]


class SweepResponse(BaseModel):
    ok: bool = True
    started_at: str
    finished_at: Optional[str] = None
    scanned: int
    alerted: int
    undelivered: int
    skipped_not_overdue: int
    skipped_cooldown: int
    failed: int
    results_by_user: dict[str, list[DispatchResultView]]


@router.post(
    "/evaluate",
    response_model=EvaluateResponse,
    summary="Evaluate one user and alert contacts if overdue",
)
async def evaluate_user(
    request: UserIdRequest,
    evaluator: OnDemandEvaluator = Depends(get_evaluator),
) -> EvaluateResponse:
    """
    On-demand evaluation.

    Overdue users are alerted immediately. The daily cooldown does not
    apply unless HEARTBEAT_ALERT_ON_DEMAND_RESPECTS_COOLDOWN is set.
    """
    try:
        result = await evaluator.evaluate(request.user_id)
    except UserNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return EvaluateResponse(
        user_id=result.user_id,
        triggered=result.triggered,
        reason=result.reason,
        results=[DispatchResultView.from_result(r) for r in result.results],
    )


@router.post(
    "/sweep",
    response_model=SweepResponse,
    summary="Run the emergency sweep now",
    responses={409: {"description": "A sweep is already running"}},
)
async def run_sweep(
    sweep: EmergencySweep = Depends(get_sweep),
) -> SweepResponse:
    summary = await sweep.run_once()
    if summary is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A sweep is already running",
        )

    return SweepResponse.model_validate(summary.to_dict())
