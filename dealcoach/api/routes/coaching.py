"""
Coaching API Routes
Stateless wrappers around the coaching engines - the caller sends the deals
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, HTTPException, Query

from dealcoach.domain.coaching.pacing import calculate_pacing
from dealcoach.domain.schemas.coaching import (
    CoachingContextResponse,
    CoachingRequest,
    CoachingStatsResponse,
    CoachMessageRequest,
    CoachMessageResponse,
    PacingResponse,
    UpsellStateResponse,
)
from dealcoach.domain.services.coaching_engine import fallback_message, generate_coaching_message
from dealcoach.domain.services.coaching_service import time_of_day_for
from dealcoach.domain.services.coaching_stats_engine import (
    calculate_coaching_stats,
    project_monthly_income,
)
from dealcoach.domain.services.upsell_engine import evaluate_upsell_state
from dealcoach.utils.time import now_local_naive

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/stats", response_model=CoachingContextResponse)
async def get_coaching_stats(request: CoachingRequest):
    """
    Aggregate a deal history into pacing stats
    """
    try:
        context = calculate_coaching_stats(
            request.domain_deals(),
            monthly_goal=request.monthly_goal,
            tier=request.tier,
            now=request.now,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid deal data: {e}")

    return CoachingContextResponse(
        tier=context.tier,
        stats=CoachingStatsResponse(**asdict(context.stats)),
        pacing=PacingResponse(**asdict(calculate_pacing(context.stats))),
        projected_income=project_monthly_income(context),
    )


@router.post("/message", response_model=CoachMessageResponse)
async def get_coaching_message(request: CoachMessageRequest):
    """
    Coaching message for a time slot

    The slot defaults to the current local time of day. Identity and
    timestamp are left to the caller.
    """
    snapshot = request.now or now_local_naive()
    slot = request.time_of_day or time_of_day_for(snapshot)

    try:
        context = calculate_coaching_stats(
            request.domain_deals(),
            monthly_goal=request.monthly_goal,
            tier=request.tier,
            now=snapshot,
        )
    except ValueError:
        logger.exception("Deal aggregation failed, returning fallback %s message", slot.value)
        body = fallback_message(slot)
    else:
        body = generate_coaching_message(context, slot)

    return CoachMessageResponse(
        type=body.type,
        level=body.level,
        text=body.text,
        data=asdict(body.data),
    )


@router.get("/upsell", response_model=UpsellStateResponse)
async def get_upsell_state(
    deal_count: int = Query(..., ge=0),
    projected_income: float = Query(0.0),
):
    """
    Free-tier warning banner state
    """
    state = evaluate_upsell_state(deal_count, projected_income)
    return UpsellStateResponse(show=state.show, **asdict(state))
