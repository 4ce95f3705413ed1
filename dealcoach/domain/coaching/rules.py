"""
COACHING RULES

Each rule is an independent (predicate, message generator) pair, optionally
gated by a minimum subscription tier. Rules never see message identity; the
caller stamps id / user / timestamp afterwards.

ALL_RULES holds them in priority order:
    1. Goal achievement   (ACHIEVEMENT, any tier)
    2. Momentum alert     (ALERT, GURU only)
    3. Morning pacing     (MORNING)
    4. Midday activity    (MIDDAY)
    5. Evening summary    (EVENING)
"""

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from dealcoach.domain.coaching.constants import MOMENTUM_ALERT_DAYS
from dealcoach.domain.coaching.pacing import calculate_pacing, round_half_up
from dealcoach.domain.models import (
    AchievementData,
    ActivityData,
    AlertData,
    CoachingContext,
    CoachMessageBody,
    CoachMessageLevel,
    CoachMessageType,
    PacingData,
    PacingStatus,
    SubscriptionTier,
)


@dataclass(frozen=True)
class CoachingRule:
    """A single coaching rule"""
    name: str
    should_trigger: Callable[[CoachingContext], bool]
    generate_message: Callable[[CoachingContext], CoachMessageBody]
    min_tier: Optional[SubscriptionTier] = None

    def is_available_for(self, tier: SubscriptionTier) -> bool:
        """Tier gate - rules without a minimum are open to everyone"""
        return self.min_tier is None or tier.meets(self.min_tier)


def _plural(count: float) -> str:
    return "s" if count > 1 else ""


def _fmt(value: float) -> str:
    """Render 0.7 as '0.7', 2.0 as '2' and 1e6 as '1000000'"""
    return f"{value:f}".rstrip("0").rstrip(".")


# -------------------------------------------------------------------
# Rule 1: Goal achievement
# -------------------------------------------------------------------

def _goal_reached(context: CoachingContext) -> bool:
    return context.stats.deals_this_month >= context.stats.monthly_goal


def _goal_achievement_message(context: CoachingContext) -> CoachMessageBody:
    stats = context.stats
    pacing = calculate_pacing(stats)

    return CoachMessageBody(
        type=CoachMessageType.ACHIEVEMENT,
        level=CoachMessageLevel.SUCCESS,
        text=(
            f"🎉 Goal achieved! You hit {stats.monthly_goal} deals with "
            f"{max(pacing.days_remaining, 0)} days left. "
            f"Every deal from here is bonus territory."
        ),
        data=AchievementData(
            deals_this_month=stats.deals_this_month,
            monthly_goal=stats.monthly_goal,
        ),
    )


goal_achievement_rule = CoachingRule(
    name="goal_achievement",
    should_trigger=_goal_reached,
    generate_message=_goal_achievement_message,
)


# -------------------------------------------------------------------
# Rule 2: Momentum alert (GURU only)
# -------------------------------------------------------------------

def _momentum_slipping(context: CoachingContext) -> bool:
    return (
        context.tier == SubscriptionTier.GURU
        and context.stats.recent_days_without_deals >= MOMENTUM_ALERT_DAYS
    )


def _momentum_alert_message(context: CoachingContext) -> CoachMessageBody:
    days = context.stats.recent_days_without_deals

    return CoachMessageBody(
        type=CoachMessageType.ALERT,
        level=CoachMessageLevel.WARNING,
        text=(
            f"You've gone {days} days without a logged deal. "
            f"Momentum is slipping - front-load follow-ups tomorrow."
        ),
        data=AlertData(recent_days_without_deals=days),
    )


momentum_alert_rule = CoachingRule(
    name="momentum_alert",
    should_trigger=_momentum_slipping,
    generate_message=_momentum_alert_message,
    min_tier=SubscriptionTier.GURU,
)


# -------------------------------------------------------------------
# Rule 3: Morning pacing
# -------------------------------------------------------------------

def _always(context: CoachingContext) -> bool:
    return True


def _morning_pacing_message(context: CoachingContext) -> CoachMessageBody:
    stats = context.stats
    pacing = calculate_pacing(stats)
    delta = abs(round_half_up(pacing.pace_delta))
    plural = _plural(abs(pacing.pace_delta))

    if pacing.status == PacingStatus.AHEAD:
        text = (
            f"Good morning! You're {delta} deal{plural} ahead of pace this month. "
            f"Protect this lead with consistent follow-up today."
        )
        level = CoachMessageLevel.SUCCESS
    elif pacing.status == PacingStatus.ON_TRACK:
        text = (
            f"Good morning! You're right on pace for your monthly goal "
            f"({stats.deals_this_month}/{stats.monthly_goal} deals). "
            f"One solid day can put you ahead of the curve."
        )
        level = CoachMessageLevel.INFO
    else:
        text = (
            f"Good morning! You're {delta} deal{plural} behind pace with "
            f"{pacing.days_remaining} days left. You need about "
            f"{_fmt(pacing.required_daily_deals)} deals per day to hit your goal."
        )
        level = CoachMessageLevel.WARNING

    return CoachMessageBody(
        type=CoachMessageType.MORNING,
        level=level,
        text=text,
        data=PacingData(pacing=pacing),
    )


morning_pacing_rule = CoachingRule(
    name="morning_pacing",
    should_trigger=_always,
    generate_message=_morning_pacing_message,
)


# -------------------------------------------------------------------
# Rule 4: Midday activity check
# -------------------------------------------------------------------

def _midday_activity_message(context: CoachingContext) -> CoachMessageBody:
    today_deals = context.stats.today_deals
    pacing = calculate_pacing(context.stats)

    if today_deals == 0:
        if context.tier.meets(SubscriptionTier.PRO):
            text = (
                f"No deals logged yet today. To catch your monthly goal, you need "
                f"{_fmt(pacing.required_daily_deals)} deals/day for the next "
                f"{pacing.days_remaining} days."
            )
        else:
            text = (
                "No deals logged yet today. "
                "You need at least 1 by close to maintain your current pace."
            )
        level = CoachMessageLevel.WARNING
    else:
        text = (
            f"You've already logged {today_deals} deal{_plural(today_deals)} today. "
            f"One more keeps you ahead of your current pace."
        )
        level = CoachMessageLevel.SUCCESS

    return CoachMessageBody(
        type=CoachMessageType.MIDDAY,
        level=level,
        text=text,
        data=ActivityData(today_deals=today_deals, pacing=pacing),
    )


midday_activity_rule = CoachingRule(
    name="midday_activity",
    should_trigger=_always,
    generate_message=_midday_activity_message,
)


# -------------------------------------------------------------------
# Rule 5: End-of-day summary
# -------------------------------------------------------------------

def _evening_summary_message(context: CoachingContext) -> CoachMessageBody:
    stats = context.stats
    pacing = calculate_pacing(stats)
    month = f"{stats.deals_this_month}/{stats.monthly_goal}"

    if stats.today_deals == 0:
        text = (
            f"Day complete with no deals logged. You're at {month} for the month. "
            f"Tomorrow is a fresh opportunity."
        )
        level = CoachMessageLevel.WARNING
    elif stats.today_deals == 1:
        closing = "Keep the momentum!" if pacing.status == PacingStatus.AHEAD else "Keep pushing!"
        text = f"Solid day with 1 deal logged. You're at {month} for the month. {closing}"
        level = CoachMessageLevel.SUCCESS
    else:
        text = (
            f"Great day with {stats.today_deals} deals logged! You're at {month} "
            f"for the month. This is the kind of consistency that wins."
        )
        level = CoachMessageLevel.SUCCESS

    return CoachMessageBody(
        type=CoachMessageType.EVENING,
        level=level,
        text=text,
        data=ActivityData(today_deals=stats.today_deals, pacing=pacing),
    )


evening_summary_rule = CoachingRule(
    name="evening_summary",
    should_trigger=_always,
    generate_message=_evening_summary_message,
)


ALL_RULES: Tuple[CoachingRule, ...] = (
    goal_achievement_rule,
    momentum_alert_rule,
    morning_pacing_rule,
    midday_activity_rule,
    evening_summary_rule,
)
