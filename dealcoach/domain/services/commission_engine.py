"""
COMMISSION ENGINE (ENGINE-4)
Deal-level commission from a pay plan

RESPONSIBILITIES:
- Front / back gross commission (pack comes off front gross)
- Finance reserve share (flat or percentage)
- Unit flat, spiffs, back-end product commissions
- Chargebacks and monthly volume bonus

RULES:
❌ No coaching logic
❌ No persistence
✅ Per-deal overrides win over plan math
✅ Rounded to cents once, on the total
"""

import logging
from dataclasses import replace
from typing import Iterable, List

from dealcoach.domain.models import (
    CommissionMode,
    Deal,
    DealCommission,
    PayPlan,
    ProductCommission,
)

logger = logging.getLogger(__name__)


class CommissionEngine:
    """
    Commission Engine
    Applies one salesperson's pay plan to their deals
    """

    def __init__(self, pay_plan: PayPlan):
        self.pay_plan = pay_plan

    def calculate_deal(self, deal: Deal) -> DealCommission:
        """
        Calculate the commission breakdown for a single deal

        Args:
            deal: Logged deal

        Returns:
            DealCommission with every component and the total
        """
        front = self._front(deal)
        back = self._back(deal)
        reserve = self._reserve(deal)
        flat = self.pay_plan.flat_rate + deal.flat
        spiffs = deal.spiffs * self.pay_plan.spiffs_rate / 100
        products = self._products(deal)
        chargeback = deal.chargeback

        total = front + back + reserve + flat + spiffs + products - chargeback

        return DealCommission(
            front=round(front, 2),
            back=round(back, 2),
            reserve=round(reserve, 2),
            flat=round(flat, 2),
            spiffs=round(spiffs, 2),
            products=round(products, 2),
            chargeback=round(chargeback, 2),
            total=round(total, 2),
        )

    def with_commissions(self, deals: Iterable[Deal]) -> List[Deal]:
        """
        Copies of the deals with commission filled in

        Deals that already carry a commission are kept as they are.
        """
        priced = []
        for deal in deals:
            if deal.commission is None:
                deal = replace(deal, commission=self.calculate_deal(deal).total)
            priced.append(deal)
        return priced

    def volume_bonus(self, units: int) -> float:
        """Largest volume bonus whose unit threshold is reached"""
        earned = [b.bonus for b in self.pay_plan.volume_bonuses if units >= b.units]
        return max(earned, default=0.0)

    def _front(self, deal: Deal) -> float:
        if deal.override_front is not None:
            return deal.override_front
        pack = deal.pack or self.pay_plan.pack
        commissionable = max(deal.front_gross - pack, 0.0)
        return commissionable * self.pay_plan.front_commission_percent / 100

    def _back(self, deal: Deal) -> float:
        if deal.override_back is not None:
            return deal.override_back
        return deal.back_gross * self.pay_plan.back_commission_percent / 100

    def _reserve(self, deal: Deal) -> float:
        if deal.override_reserve is not None:
            return deal.override_reserve
        reserve = self.pay_plan.finance_reserve
        if reserve.mode == CommissionMode.FLAT:
            return reserve.value if deal.finance_gross else 0.0
        return (deal.finance_gross or 0.0) * reserve.value / 100

    def _products(self, deal: Deal) -> float:
        total = 0.0
        for name in deal.products.attached():
            rule = self.pay_plan.product_commission.get(name)
            if rule is None:
                logger.debug("No commission configured for product %s on deal %s", name, deal.id)
                continue
            total += self._product_amount(rule, deal)
        return total

    @staticmethod
    def _product_amount(rule: ProductCommission, deal: Deal) -> float:
        if rule.mode == CommissionMode.FLAT:
            return rule.flat_amount
        return deal.back_gross * rule.percent_of_gross / 100
