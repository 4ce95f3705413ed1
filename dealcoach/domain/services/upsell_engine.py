"""
UPSELL ENGINE (ENGINE-3)
Free-tier limit nudges

Two deals before the free limit the banner shows how many free deals are
left; one deal before it shows projected income and the upgrade button.
Every other count shows nothing. This is a nudge, enforcement of the limit
happens elsewhere.
"""

from dealcoach.domain.coaching.constants import FREE_DEAL_LIMIT, PRO_PRICE_LABEL
from dealcoach.domain.models import UpsellState, UpsellWarningLevel


def evaluate_upsell_state(
    deal_count: int,
    projected_income: float,
    free_deal_limit: int = FREE_DEAL_LIMIT,
) -> UpsellState:
    """
    Decide which free-tier warning to surface

    Args:
        deal_count: Deals logged so far on the free tier
        projected_income: Projected monthly income shown in the hard warning
        free_deal_limit: Number of free deals before Pro is required

    Returns:
        UpsellState (warning_level NONE when nothing should be shown)
    """
    if deal_count == free_deal_limit - 2:
        remaining = free_deal_limit - deal_count
        return UpsellState(
            warning_level=UpsellWarningLevel.SOFT,
            deals_remaining=remaining,
            title="You're almost at the Pro unlock point",
            message=f"{remaining} free deals remaining. Keep crushing it!",
        )

    if deal_count == free_deal_limit - 1:
        return UpsellState(
            warning_level=UpsellWarningLevel.HARD,
            projected_income=projected_income,
            title="Next deal requires Pro",
            message=(
                f"Your current projected income is {format_currency(projected_income)}. "
                f"Don't lose your momentum!"
            ),
            cta_label=f"Upgrade to Pro - {PRO_PRICE_LABEL}",
        )

    return UpsellState(warning_level=UpsellWarningLevel.NONE)


def format_currency(amount: float) -> str:
    """$12,345 for whole amounts, $12,345.50 otherwise"""
    if float(amount).is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"
