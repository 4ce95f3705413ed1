from typing import Dict, List

from pydantic import BaseModel, Field

from dealcoach.domain.models import (
    CommissionMode,
    FinanceReserve,
    PayPlan,
    ProductCommission,
    VolumeBonus,
)
from dealcoach.domain.schemas.coaching import DealSchema


class ProductCommissionSchema(BaseModel):
    mode: CommissionMode = CommissionMode.FLAT
    flat_amount: float = 0.0
    percent_of_gross: float = 0.0


class FinanceReserveSchema(BaseModel):
    mode: CommissionMode = CommissionMode.FLAT
    value: float = 0.0


class VolumeBonusSchema(BaseModel):
    units: int = Field(ge=1)
    bonus: float


class PayPlanSchema(BaseModel):
    front_commission_percent: float = Field(default=0.0, ge=0, le=100)
    back_commission_percent: float = Field(default=0.0, ge=0, le=100)
    finance_reserve: FinanceReserveSchema = Field(default_factory=FinanceReserveSchema)
    pack: float = 0.0
    flat_rate: float = 0.0
    spiffs_rate: float = Field(default=100.0, ge=0)
    volume_bonuses: List[VolumeBonusSchema] = Field(default_factory=list)
    product_commission: Dict[str, ProductCommissionSchema] = Field(default_factory=dict)

    def to_domain(self) -> PayPlan:
        return PayPlan(
            front_commission_percent=self.front_commission_percent,
            back_commission_percent=self.back_commission_percent,
            finance_reserve=FinanceReserve(**self.finance_reserve.model_dump()),
            pack=self.pack,
            flat_rate=self.flat_rate,
            spiffs_rate=self.spiffs_rate,
            volume_bonuses=tuple(VolumeBonus(**b.model_dump()) for b in self.volume_bonuses),
            product_commission={
                name: ProductCommission(**rule.model_dump())
                for name, rule in self.product_commission.items()
            },
        )


class DealCommissionRequest(BaseModel):
    deal: DealSchema
    pay_plan: PayPlanSchema


class CommissionSummaryRequest(BaseModel):
    deals: List[DealSchema]
    pay_plan: PayPlanSchema


class DealCommissionResponse(BaseModel):
    front: float
    back: float
    reserve: float
    flat: float
    spiffs: float
    products: float
    chargeback: float
    total: float


class CommissionSummaryResponse(BaseModel):
    units: int
    commission: float
    volume_bonus: float
    total: float
    deals: Dict[str, DealCommissionResponse]
