"""Tests for the monthly aggregation engine."""

import pytest
from datetime import date
from decimal import Decimal

from household_ledger.aggregation import (
    available_budget,
    current_month_key,
    filter_history,
    monthly_progress,
    months_with_activity,
    rollup_for_month,
    transactions_for_month,
    unassigned_spent,
)
from household_ledger.models.budget import Buyer

from conftest import make_txn


@pytest.fixture
def march_and_april():
    return [
        make_txn("150.00", Buyer.PARTY_A, category_id=2, on="2024-03-22", txn_id="t1"),
        make_txn("45.00", Buyer.PARTY_B, category_id=3, on="2024-03-21", txn_id="t2"),
        make_txn("1200.00", Buyer.JOINT, category_id=1, on="2024-03-01", txn_id="t3"),
        make_txn("80.00", Buyer.PARTY_A, category_id=2, on="2024-03-30", txn_id="t4"),
        make_txn("60.00", Buyer.PARTY_B, category_id=6, on="2024-04-02", txn_id="t5"),
    ]


class TestTransactionsForMonth:
    """Tests for the monthly slice."""

    def test_filters_by_month_prefix(self, march_and_april):
        march = transactions_for_month(march_and_april, "2024-03")
        assert [t.id for t in march] == ["t1", "t2", "t3", "t4"]

    def test_same_month_other_year_excluded(self):
        txns = [make_txn(10, Buyer.JOINT, on="2023-03-10")]
        assert transactions_for_month(txns, "2024-03") == []

    def test_malformed_month_matches_nothing(self, march_and_april):
        """A bad month key degrades to an empty slice rather than raising."""
        assert transactions_for_month(march_and_april, "2024-3") == []
        assert transactions_for_month(march_and_april, "March") == []
        assert transactions_for_month(march_and_april, "") == []


class TestRollupForMonth:
    """Tests for per-category rollups."""

    def test_spent_per_category(self, march_and_april, categories):
        rollups = rollup_for_month(march_and_april, categories, "2024-03")
        spent = {r.category.id: r.spent for r in rollups}
        assert spent == {
            1: Decimal("1200.00"),
            2: Decimal("230.00"),
            3: Decimal("45.00"),
            4: Decimal("0"),
            5: Decimal("0"),
            6: Decimal("0"),
        }

    def test_order_matches_category_order(self, march_and_april, categories):
        reversed_categories = list(reversed(categories))
        rollups = rollup_for_month(march_and_april, reversed_categories, "2024-03")
        assert [r.category for r in rollups] == reversed_categories

    def test_rollup_completeness(self, march_and_april, categories):
        """Sum of rollups equals the month's transaction total."""
        for month in ("2024-03", "2024-04", "2024-05"):
            rollups = rollup_for_month(march_and_april, categories, month)
            expected = sum(
                (t.amount for t in march_and_april if t.date.isoformat().startswith(month)),
                Decimal("0"),
            )
            assert sum((r.spent for r in rollups), Decimal("0")) == expected

    def test_zero_activity_month(self, march_and_april, categories):
        """Every category is zero and the whole budget is available."""
        rollups = rollup_for_month(march_and_april, categories, "2025-01")
        assert len(rollups) == len(categories)
        assert all(r.spent == 0 for r in rollups)
        assert available_budget(rollups) == sum(c.limit for c in categories)

    def test_unknown_category_not_rolled_up(self, categories):
        txns = [
            make_txn(10, Buyer.JOINT, category_id=1),
            make_txn(99, Buyer.JOINT, category_id=42),
        ]
        rollups = rollup_for_month(txns, categories, "2024-03")
        assert sum(r.spent for r in rollups) == Decimal("10")
        assert unassigned_spent(txns, categories, "2024-03") == Decimal("99")
        assert unassigned_spent(txns, categories, "2024-04") == Decimal("0")

    def test_empty_inputs(self, categories):
        assert rollup_for_month([], categories, "2024-03")[0].spent == 0
        assert rollup_for_month([], [], "2024-03") == []


class TestBudgetTotals:
    """Tests for available budget and monthly progress."""

    def test_available_budget(self, march_and_april, categories):
        rollups = rollup_for_month(march_and_april, categories, "2024-03")
        # 4500 total limit - 1475 spent
        assert available_budget(rollups) == Decimal("3025.00")

    def test_available_budget_can_go_negative(self, shared_category):
        txns = [make_txn(1000, Buyer.PARTY_A)]
        rollups = rollup_for_month(txns, [shared_category], "2024-03")
        assert available_budget(rollups) == Decimal("-200")

    def test_monthly_progress(self, shared_category):
        txns = [make_txn(200, Buyer.PARTY_A)]
        rollups = rollup_for_month(txns, [shared_category], "2024-03")
        assert monthly_progress(rollups) == pytest.approx(25.0)

    def test_monthly_progress_without_limits(self):
        assert monthly_progress([]) == 0.0


class TestMonthsWithActivity:
    """Tests for month navigation keys."""

    def test_empty_list_returns_current_month(self):
        assert months_with_activity([]) == [current_month_key()]

    def test_empty_list_with_fixed_today(self):
        assert months_with_activity([], today=date(2024, 5, 17)) == ["2024-05"]

    def test_sorted_and_deduplicated(self, march_and_april):
        months = months_with_activity(march_and_april, today=date(2024, 6, 1))
        assert months == ["2024-03", "2024-04", "2024-06"]

    def test_current_month_not_duplicated(self, march_and_april):
        months = months_with_activity(march_and_april, today=date(2024, 3, 31))
        assert months == ["2024-03", "2024-04"]

    def test_chronological_across_years(self):
        txns = [
            make_txn(1, Buyer.JOINT, on="2024-01-05"),
            make_txn(1, Buyer.JOINT, on="2023-12-31"),
            make_txn(1, Buyer.JOINT, on="2023-02-01"),
        ]
        months = months_with_activity(txns, today=date(2024, 1, 10))
        assert months == ["2023-02", "2023-12", "2024-01"]


class TestFilterHistory:
    """Tests for the history listing filters."""

    def test_no_filters_newest_first(self, march_and_april):
        history = filter_history(march_and_april)
        assert [t.id for t in history] == ["t5", "t4", "t1", "t2", "t3"]

    def test_filter_by_month(self, march_and_april):
        assert [t.id for t in filter_history(march_and_april, month="2024-04")] == ["t5"]

    def test_filter_by_category_and_buyer(self, march_and_april):
        history = filter_history(march_and_april, category_id=2, buyer=Buyer.PARTY_A)
        assert [t.id for t in history] == ["t4", "t1"]

    def test_same_day_ordered_by_id(self):
        txns = [
            make_txn(1, Buyer.JOINT, on="2024-03-01", txn_id="b"),
            make_txn(1, Buyer.JOINT, on="2024-03-01", txn_id="a"),
        ]
        assert [t.id for t in filter_history(txns)] == ["a", "b"]

    def test_no_match(self, march_and_april):
        assert filter_history(march_and_april, buyer=Buyer.JOINT, month="2024-04") == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
