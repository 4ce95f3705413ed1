"""
Unit Tests for the coaching rules and message selection
"""

import pytest

from dealcoach.domain.coaching.constants import FALLBACK_TEXT
from dealcoach.domain.coaching.rules import (
    ALL_RULES,
    CoachingRule,
    evening_summary_rule,
    midday_activity_rule,
    momentum_alert_rule,
    morning_pacing_rule,
)
from dealcoach.domain.models import (
    AchievementData,
    ActivityData,
    AlertData,
    CoachingContext,
    CoachingStats,
    CoachMessageBody,
    CoachMessageLevel,
    CoachMessageType,
    EmptyData,
    PacingData,
    SubscriptionTier,
    TimeOfDay,
)
from dealcoach.domain.services.coaching_engine import fallback_message, generate_coaching_message


def make_context(tier=SubscriptionTier.FREE, **overrides) -> CoachingContext:
    values = dict(
        monthly_goal=20,
        deals_this_month=10,
        deals_last_month=0,
        commission_this_month=0.0,
        commission_last_month=0.0,
        avg_commission_this_month=0.0,
        avg_commission_last_month=0.0,
        days_elapsed=15,
        days_in_month=30,
        today_deals=0,
        recent_days_without_deals=0,
    )
    values.update(overrides)
    return CoachingContext(tier=tier, stats=CoachingStats(**values))


def test_rules_are_in_priority_order():
    assert [r.name for r in ALL_RULES] == [
        "goal_achievement",
        "momentum_alert",
        "morning_pacing",
        "midday_activity",
        "evening_summary",
    ]


class TestSelection:
    """Priority scan, preemption and fallback"""

    @pytest.mark.parametrize("slot", list(TimeOfDay))
    def test_achievement_preempts_every_slot(self, slot):
        context = make_context(
            tier=SubscriptionTier.GURU,
            deals_this_month=20,
            recent_days_without_deals=5,
        )

        message = generate_coaching_message(context, slot)

        assert message.type == CoachMessageType.ACHIEVEMENT
        assert message.level == CoachMessageLevel.SUCCESS
        assert message.text == (
            "🎉 Goal achieved! You hit 20 deals with 15 days left. "
            "Every deal from here is bonus territory."
        )
        assert message.data == AchievementData(deals_this_month=20, monthly_goal=20)

    def test_momentum_alert_for_guru(self):
        context = make_context(tier=SubscriptionTier.GURU, recent_days_without_deals=3)

        message = generate_coaching_message(context, TimeOfDay.EVENING)

        assert message.type == CoachMessageType.ALERT
        assert message.level == CoachMessageLevel.WARNING
        assert message.text.startswith("You've gone 3 days without a logged deal.")
        assert message.data == AlertData(recent_days_without_deals=3)

    @pytest.mark.parametrize("tier", [SubscriptionTier.FREE, SubscriptionTier.PRO])
    def test_momentum_alert_never_below_guru(self, tier):
        context = make_context(tier=tier, recent_days_without_deals=7)

        message = generate_coaching_message(context, TimeOfDay.MORNING)

        assert message.type == CoachMessageType.MORNING

    def test_guru_short_drought_gets_slot_message(self):
        context = make_context(tier=SubscriptionTier.GURU, recent_days_without_deals=2)
        assert generate_coaching_message(context, TimeOfDay.MIDDAY).type == CoachMessageType.MIDDAY

    def test_free_midday_matches_midday_rule(self):
        message = generate_coaching_message(make_context(), TimeOfDay.MIDDAY)

        assert message.type == CoachMessageType.MIDDAY
        assert message.text != FALLBACK_TEXT

    @pytest.mark.parametrize("slot", list(TimeOfDay))
    def test_slot_selects_matching_rule(self, slot):
        message = generate_coaching_message(make_context(), slot)
        assert message.type.value == slot.value

    def test_tier_gate_skips_rule(self):
        gated = CoachingRule(
            name="gated",
            should_trigger=lambda context: True,
            generate_message=lambda context: CoachMessageBody(
                type=CoachMessageType.ALERT,
                level=CoachMessageLevel.WARNING,
                text="gated",
            ),
            min_tier=SubscriptionTier.GURU,
        )

        message = generate_coaching_message(
            make_context(tier=SubscriptionTier.PRO),
            TimeOfDay.MORNING,
            rules=(gated, morning_pacing_rule),
        )

        assert message.type == CoachMessageType.MORNING

    def test_fallback_when_no_rule_matches_slot(self):
        message = generate_coaching_message(
            make_context(), TimeOfDay.MIDDAY, rules=(morning_pacing_rule,)
        )

        assert message == fallback_message(TimeOfDay.MIDDAY)
        assert message.type == CoachMessageType.MIDDAY
        assert message.level == CoachMessageLevel.INFO
        assert message.text == FALLBACK_TEXT
        assert message.data == EmptyData()

    def test_fallback_with_no_rules(self):
        message = generate_coaching_message(make_context(), TimeOfDay.EVENING, rules=())
        assert message.type == CoachMessageType.EVENING

    def test_selection_is_deterministic(self):
        context = make_context(deals_this_month=7, today_deals=1)
        first = generate_coaching_message(context, TimeOfDay.MORNING)
        second = generate_coaching_message(context, TimeOfDay.MORNING)
        assert first == second


class TestMorningPacing:
    def test_on_track(self):
        message = morning_pacing_rule.generate_message(make_context())

        assert message.level == CoachMessageLevel.INFO
        assert message.text == (
            "Good morning! You're right on pace for your monthly goal (10/20 deals). "
            "One solid day can put you ahead of the curve."
        )
        assert isinstance(message.data, PacingData)

    def test_ahead_plural(self):
        message = morning_pacing_rule.generate_message(make_context(deals_this_month=13))

        assert message.level == CoachMessageLevel.SUCCESS
        assert message.text.startswith("Good morning! You're 3 deals ahead of pace this month.")

    def test_ahead_by_exactly_one_is_singular(self):
        message = morning_pacing_rule.generate_message(make_context(deals_this_month=11))
        assert "You're 1 deal ahead of pace" in message.text

    def test_behind_cites_required_rate(self):
        message = morning_pacing_rule.generate_message(make_context(deals_this_month=7))

        assert message.level == CoachMessageLevel.WARNING
        assert message.text == (
            "Good morning! You're 3 deals behind pace with 15 days left. "
            "You need about 0.9 deals per day to hit your goal."
        )

    def test_large_required_rate_is_written_out(self):
        context = make_context(monthly_goal=15_000_007, deals_this_month=7)
        message = morning_pacing_rule.generate_message(context)

        assert "You need about 1000000 deals per day" in message.text


class TestMiddayActivity:
    def test_free_tier_without_deals(self):
        message = midday_activity_rule.generate_message(make_context())

        assert message.level == CoachMessageLevel.WARNING
        assert message.text == (
            "No deals logged yet today. "
            "You need at least 1 by close to maintain your current pace."
        )

    @pytest.mark.parametrize("tier", [SubscriptionTier.PRO, SubscriptionTier.GURU])
    def test_paid_tier_without_deals_gets_rate(self, tier):
        message = midday_activity_rule.generate_message(make_context(tier=tier))

        assert message.level == CoachMessageLevel.WARNING
        assert message.text == (
            "No deals logged yet today. To catch your monthly goal, "
            "you need 0.7 deals/day for the next 15 days."
        )

    def test_one_deal_today(self):
        message = midday_activity_rule.generate_message(make_context(today_deals=1))

        assert message.level == CoachMessageLevel.SUCCESS
        assert message.text.startswith("You've already logged 1 deal today.")
        assert message.data.today_deals == 1

    def test_several_deals_today(self):
        message = midday_activity_rule.generate_message(make_context(today_deals=2))
        assert message.text.startswith("You've already logged 2 deals today.")


class TestEveningSummary:
    def test_no_deals_at_all(self):
        message = evening_summary_rule.generate_message(make_context(deals_this_month=0))

        assert message.type == CoachMessageType.EVENING
        assert message.level == CoachMessageLevel.WARNING
        assert "0/20" in message.text
        assert isinstance(message.data, ActivityData)

    def test_one_deal_on_track(self):
        message = evening_summary_rule.generate_message(make_context(today_deals=1))

        assert message.level == CoachMessageLevel.SUCCESS
        assert message.text == (
            "Solid day with 1 deal logged. You're at 10/20 for the month. Keep pushing!"
        )

    def test_one_deal_ahead(self):
        message = evening_summary_rule.generate_message(
            make_context(deals_this_month=13, today_deals=1)
        )
        assert message.text.endswith("Keep the momentum!")

    def test_several_deals(self):
        message = evening_summary_rule.generate_message(make_context(today_deals=3))

        assert message.level == CoachMessageLevel.SUCCESS
        assert message.text.startswith("Great day with 3 deals logged!")


def test_momentum_rule_is_gated_to_guru():
    assert momentum_alert_rule.min_tier == SubscriptionTier.GURU
    assert not momentum_alert_rule.is_available_for(SubscriptionTier.PRO)
    assert momentum_alert_rule.is_available_for(SubscriptionTier.GURU)
