from datetime import datetime

import pytest

from dealcoach.domain.models import Deal, SubscriptionTier
from dealcoach.domain.services.coaching_stats_engine import (
    calculate_coaching_stats,
    project_monthly_income,
)

NOW = datetime(2026, 10, 19, 10, 30)


def _deal(delivery_date, commission=None, deal_id=None) -> Deal:
    return Deal(id=deal_id or f"deal-{delivery_date}", delivery_date=delivery_date, commission=commission)


@pytest.fixture
def history():
    return [
        _deal("2026-10-19T09:00:00", 500.0, "a"),
        _deal("2026-10-19", 300.0, "b"),
        _deal("2026-10-15", None, "c"),
        _deal("2026-09-30T18:00:00Z", 400.0, "d"),
        _deal("2026-09-02", 600.0, "e"),
        _deal("2025-10-19", 900.0, "f"),
    ]


class TestCalculateCoachingStats:
    """Deal history -> coaching context"""

    def test_partitions_by_month(self, history):
        stats = calculate_coaching_stats(history, monthly_goal=12, now=NOW).stats

        assert stats.monthly_goal == 12
        assert stats.deals_this_month == 3
        assert stats.deals_last_month == 2

    def test_commission_sums_and_averages(self, history):
        stats = calculate_coaching_stats(history, monthly_goal=12, now=NOW).stats

        assert stats.commission_this_month == 800.0
        assert stats.avg_commission_this_month == pytest.approx(800.0 / 3)
        assert stats.commission_last_month == 1000.0
        assert stats.avg_commission_last_month == 500.0

    def test_calendar_fields(self, history):
        stats = calculate_coaching_stats(history, monthly_goal=12, now=NOW).stats

        assert stats.days_elapsed == 19
        assert stats.days_in_month == 31
        assert stats.today_deals == 2
        assert stats.recent_days_without_deals == 0

    def test_tier_defaults_to_free(self, history):
        context = calculate_coaching_stats(history, monthly_goal=12, now=NOW)
        assert context.tier == SubscriptionTier.FREE

    def test_tier_is_carried(self, history):
        context = calculate_coaching_stats(history, 12, SubscriptionTier.GURU, now=NOW)
        assert context.tier == SubscriptionTier.GURU

    def test_empty_history_averages_zero(self):
        stats = calculate_coaching_stats([], monthly_goal=10, now=NOW).stats

        assert stats.deals_this_month == 0
        assert stats.avg_commission_this_month == 0.0
        assert stats.avg_commission_last_month == 0.0
        assert stats.today_deals == 0

    def test_january_looks_back_to_december(self):
        deals = [_deal("2026-12-20", 250.0), _deal("2026-01-20", 999.0)]
        stats = calculate_coaching_stats(deals, 10, now=datetime(2027, 1, 5, 9, 0)).stats

        assert stats.deals_last_month == 1
        assert stats.commission_last_month == 250.0
        assert stats.deals_this_month == 0

    def test_deals_without_delivery_date_are_skipped(self):
        deals = [_deal(None), _deal(""), _deal("2026-10-19")]
        stats = calculate_coaching_stats(deals, 10, now=NOW).stats
        assert stats.deals_this_month == 1

    def test_malformed_delivery_date_raises(self):
        with pytest.raises(ValueError):
            calculate_coaching_stats([_deal("19/10/2026")], 10, now=NOW)

    def test_same_snapshot_is_idempotent(self, history):
        before = list(history)

        first = calculate_coaching_stats(history, 12, now=NOW)
        second = calculate_coaching_stats(history, 12, now=NOW)

        assert first == second
        assert history == before


class TestRecentDaysWithoutDeals:
    """Unbroken no-deal run ending today"""

    def test_counts_back_to_last_deal(self):
        stats = calculate_coaching_stats([_deal("2026-10-15")], 10, now=NOW).stats
        assert stats.recent_days_without_deals == 4

    def test_caps_at_seven_days(self):
        stats = calculate_coaching_stats([_deal("2026-10-01")], 10, now=NOW).stats
        assert stats.recent_days_without_deals == 7

    def test_stops_at_most_recent_deal(self):
        deals = [_deal("2026-10-18"), _deal("2026-10-12")]
        stats = calculate_coaching_stats(deals, 10, now=NOW).stats
        assert stats.recent_days_without_deals == 1

    def test_previous_month_deals_do_not_break_streak(self):
        deals = [_deal("2026-10-31"), _deal("2026-10-30")]
        stats = calculate_coaching_stats(deals, 10, now=datetime(2026, 11, 2, 8, 0)).stats

        assert stats.deals_last_month == 2
        assert stats.recent_days_without_deals == 7


def test_project_monthly_income():
    deals = [_deal("2026-09-05", 600.0), _deal("2026-09-08", 400.0)]
    context = calculate_coaching_stats(deals, 10, now=datetime(2026, 9, 10, 12, 0))

    # 1000 over 10 days, 30-day month
    assert project_monthly_income(context) == 3000.0
