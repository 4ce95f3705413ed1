from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from dealcoach.config import settings
from dealcoach.domain.models import (
    CoachMessageLevel,
    CoachMessageType,
    Deal,
    DealType,
    PacingStatus,
    ProductStatus,
    SubscriptionTier,
    TimeOfDay,
    UpsellWarningLevel,
)


class ProductStatusSchema(BaseModel):
    vsc: bool = False
    gap: bool = False
    maintenance: bool = False
    accessories: bool = False
    tire_and_wheel: bool = False
    appearance_package: bool = False
    key_replacement: bool = False


class DealSchema(BaseModel):
    id: str
    delivery_date: Optional[str] = None
    customer_name: str = ""
    type: DealType = DealType.NEW
    year: str = ""
    make: str = ""
    model: str = ""
    front_gross: float = 0.0
    back_gross: float = 0.0
    finance_gross: Optional[float] = None
    pack: float = 0.0
    flat: float = 0.0
    spiffs: float = 0.0
    products: ProductStatusSchema = Field(default_factory=ProductStatusSchema)
    chargeback: float = 0.0
    note: str = ""
    created_at: Optional[str] = None
    override_front: Optional[float] = None
    override_back: Optional[float] = None
    override_reserve: Optional[float] = None
    commission: Optional[float] = None

    def to_domain(self) -> Deal:
        data = self.model_dump()
        data["products"] = ProductStatus(**data["products"])
        return Deal(**data)


class CoachingRequest(BaseModel):
    deals: List[DealSchema] = Field(default_factory=list)
    monthly_goal: int = Field(default_factory=lambda: settings.DEFAULT_MONTHLY_GOAL, ge=1)
    tier: SubscriptionTier = SubscriptionTier.FREE
    now: Optional[datetime] = Field(
        default=None,
        description="Local time snapshot; server clock when omitted",
    )

    @field_validator("tier", mode="before")
    @classmethod
    def parse_tier(cls, value):
        return SubscriptionTier.parse(value)

    def domain_deals(self) -> List[Deal]:
        return [d.to_domain() for d in self.deals]


class CoachMessageRequest(CoachingRequest):
    time_of_day: Optional[TimeOfDay] = None


class CoachingStatsResponse(BaseModel):
    monthly_goal: int
    deals_this_month: int
    deals_last_month: int
    commission_this_month: float
    commission_last_month: float
    avg_commission_this_month: float
    avg_commission_last_month: float
    days_elapsed: int
    days_in_month: int
    today_deals: int
    recent_days_without_deals: int


class PacingResponse(BaseModel):
    status: PacingStatus
    pace_delta: float
    days_remaining: int
    required_daily_deals: float
    expected_pace: float


class CoachingContextResponse(BaseModel):
    tier: SubscriptionTier
    stats: CoachingStatsResponse
    pacing: PacingResponse
    projected_income: float


class CoachMessageResponse(BaseModel):
    type: CoachMessageType
    level: CoachMessageLevel
    text: str
    data: Dict[str, Any]


class UpsellStateResponse(BaseModel):
    warning_level: UpsellWarningLevel
    show: bool
    deals_remaining: Optional[int] = None
    projected_income: Optional[float] = None
    title: Optional[str] = None
    message: Optional[str] = None
    cta_label: Optional[str] = None
