"""
Commission API Routes
Deal-level and monthly commission from a pay plan
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from dealcoach.domain.schemas.commission import (
    CommissionSummaryRequest,
    CommissionSummaryResponse,
    DealCommissionRequest,
    DealCommissionResponse,
    PayPlanSchema,
)
from dealcoach.domain.services.commission_engine import CommissionEngine

router = APIRouter()


def _engine(pay_plan: PayPlanSchema) -> CommissionEngine:
    try:
        return CommissionEngine(pay_plan.to_domain())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/deal", response_model=DealCommissionResponse)
async def calculate_deal_commission(request: DealCommissionRequest):
    """
    Commission breakdown for one deal
    """
    engine = _engine(request.pay_plan)
    result = engine.calculate_deal(request.deal.to_domain())
    return DealCommissionResponse(**asdict(result))


@router.post("/summary", response_model=CommissionSummaryResponse)
async def calculate_commission_summary(request: CommissionSummaryRequest):
    """
    Commission for a batch of deals plus the volume bonus they earn
    """
    ids = [deal_in.id for deal_in in request.deals]
    duplicates = sorted({deal_id for deal_id in ids if ids.count(deal_id) > 1})
    if duplicates:
        raise HTTPException(status_code=422, detail=f"Duplicate deal ids: {duplicates}")

    engine = _engine(request.pay_plan)

    breakdown = {}
    for deal_in in request.deals:
        breakdown[deal_in.id] = DealCommissionResponse(
            **asdict(engine.calculate_deal(deal_in.to_domain()))
        )

    units = len(request.deals)
    commission = round(sum(b.total for b in breakdown.values()), 2)
    volume_bonus = engine.volume_bonus(units)

    return CommissionSummaryResponse(
        units=units,
        commission=commission,
        volume_bonus=volume_bonus,
        total=round(commission + volume_bonus, 2),
        deals=breakdown,
    )
