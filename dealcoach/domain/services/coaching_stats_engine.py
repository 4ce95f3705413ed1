"""
COACHING STATS ENGINE (ENGINE-1)
Reduce a raw deal history into a CoachingContext

RESPONSIBILITIES:
- Split deals into this month / last month
- Count today's deals and the current no-deal streak
- Sum and average commission per month

RULES:
❌ No message selection
❌ No caching, recomputed per request
❌ No mutation of the input deals
✅ Single "now" snapshot per call
✅ Division guarded to 0
"""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from dealcoach.domain.coaching.constants import DROUGHT_WINDOW_DAYS
from dealcoach.domain.models import CoachingContext, CoachingStats, Deal, SubscriptionTier
from dealcoach.utils.time import now_local_naive, parse_delivery_date

logger = logging.getLogger(__name__)


def calculate_coaching_stats(
    deals: Iterable[Deal],
    monthly_goal: int,
    tier: SubscriptionTier = SubscriptionTier.FREE,
    now: Optional[datetime] = None,
) -> CoachingContext:
    """
    Build the coaching context for one user

    Args:
        deals: Full deal history, any order
        monthly_goal: Target deal count for the calendar month
        tier: Subscription tier (FREE when unknown)
        now: Snapshot of the current local time (wall clock when omitted)

    Returns:
        CoachingContext

    Raises:
        ValueError: A delivery date is present but not ISO formatted
    """
    snapshot = now if now is not None else now_local_naive()
    today = snapshot.date()
    last_month, last_month_year = _previous_month(today.month, today.year)

    this_month: List[Deal] = []
    previous: List[Deal] = []
    for deal in deals:
        if not deal.delivery_date:
            continue
        delivered = parse_delivery_date(deal.delivery_date)
        if delivered.month == today.month and delivered.year == today.year:
            this_month.append(deal)
        elif delivered.month == last_month and delivered.year == last_month_year:
            previous.append(deal)

    today_key = today.isoformat()
    today_deals = sum(1 for d in this_month if d.delivery_day == today_key)

    commission_this_month = _sum_commission(this_month)
    commission_last_month = _sum_commission(previous)

    stats = CoachingStats(
        monthly_goal=monthly_goal,
        deals_this_month=len(this_month),
        deals_last_month=len(previous),
        commission_this_month=commission_this_month,
        commission_last_month=commission_last_month,
        avg_commission_this_month=_average(commission_this_month, len(this_month)),
        avg_commission_last_month=_average(commission_last_month, len(previous)),
        days_elapsed=today.day,
        days_in_month=calendar.monthrange(today.year, today.month)[1],
        today_deals=today_deals,
        recent_days_without_deals=_recent_days_without_deals(this_month, today),
    )

    logger.debug(
        "Coaching stats for %s: %d/%d deals this month, %d today, %d-day drought",
        today_key,
        stats.deals_this_month,
        monthly_goal,
        today_deals,
        stats.recent_days_without_deals,
    )

    return CoachingContext(tier=tier, stats=stats)


def project_monthly_income(context: CoachingContext) -> float:
    """
    Straight-line projection of this month's commission to month end

    Returns 0 before any day has elapsed.
    """
    stats = context.stats
    if stats.days_elapsed <= 0:
        return 0.0
    return round(stats.commission_this_month / stats.days_elapsed * stats.days_in_month, 2)


def _previous_month(month: int, year: int) -> tuple[int, int]:
    if month == 1:
        return 12, year - 1
    return month - 1, year


def _sum_commission(deals: Sequence[Deal]) -> float:
    return sum((d.commission or 0.0) for d in deals)


def _average(total: float, count: int) -> float:
    return total / count if count > 0 else 0.0


def _recent_days_without_deals(this_month: Sequence[Deal], today: date) -> int:
    """
    Length of the unbroken no-deal run ending today

    Walks back from today over at most DROUGHT_WINDOW_DAYS days and stops at
    the first day with a deal. Only this month's deals count, so days that
    fall in the previous month always read as empty.
    """
    delivered_days = {d.delivery_day for d in this_month}

    streak = 0
    for offset in range(DROUGHT_WINDOW_DAYS):
        day = (today - timedelta(days=offset)).isoformat()
        if day in delivered_days:
            break
        streak += 1
    return streak
