"""
PACING
Linear month-to-date pace against the monthly deal goal

expected_pace grows linearly from 0 on day 0 to monthly_goal on the last day
of the month. pace_delta is how far the actual count sits from that line.
"""

import math

from dealcoach.domain.coaching.constants import PACE_DEAD_ZONE
from dealcoach.domain.models import CoachingStats, PacingResult, PacingStatus


def calculate_pacing(stats: CoachingStats) -> PacingResult:
    """
    Derive pace status and the daily rate still needed to reach the goal.

    Args:
        stats: Aggregated month stats

    Returns:
        PacingResult
    """
    if stats.days_in_month > 0:
        expected_pace = stats.monthly_goal / stats.days_in_month * stats.days_elapsed
    else:
        expected_pace = 0.0

    pace_delta = stats.deals_this_month - expected_pace
    days_remaining = stats.days_in_month - stats.days_elapsed

    return PacingResult(
        status=pacing_status(pace_delta),
        pace_delta=pace_delta,
        days_remaining=days_remaining,
        required_daily_deals=required_daily_deals(
            stats.monthly_goal, stats.deals_this_month, days_remaining
        ),
        expected_pace=expected_pace,
    )


def pacing_status(pace_delta: float) -> PacingStatus:
    """Boundaries +1 / -1 belong to AHEAD / BEHIND, not ON_TRACK"""
    if pace_delta >= PACE_DEAD_ZONE:
        return PacingStatus.AHEAD
    if pace_delta <= -PACE_DEAD_ZONE:
        return PacingStatus.BEHIND
    return PacingStatus.ON_TRACK


def required_daily_deals(monthly_goal: int, deals_this_month: int, days_remaining: int) -> float:
    """
    Deals per remaining day to reach the goal, rounded up to one decimal.

    Zero once the month is over or the goal is already reached.
    """
    if days_remaining <= 0:
        return 0.0
    rate = math.ceil((monthly_goal - deals_this_month) / days_remaining * 10) / 10
    return max(rate, 0.0)


def round_half_up(value: float) -> int:
    """Round .5 away from zero on the positive side (1.5 -> 2, -1.5 -> -1)"""
    return math.floor(value + 0.5)
