"""Tests for the settlement calculator."""

import pytest
from decimal import Decimal

from household_ledger.models.budget import BalanceInfo, Buyer, Party
from household_ledger.settlement import (
    DEFAULT_TOLERANCE,
    SettlementCalculator,
    settle,
)

from conftest import make_txn


MONTH = "2024-03"


def _swap(buyer: Buyer) -> Buyer:
    return {
        Buyer.PARTY_A: Buyer.PARTY_B,
        Buyer.PARTY_B: Buyer.PARTY_A,
        Buyer.JOINT: Buyer.JOINT,
    }[buyer]


class TestSettleScenarios:
    """Worked settlement scenarios."""

    def test_balanced_case(self, shared_category):
        """Equal payments into a shared category settle to nothing."""
        txns = [
            make_txn(100, Buyer.PARTY_A),
            make_txn(100, Buyer.PARTY_B),
        ]
        balance = settle(txns, [shared_category], MONTH)
        assert balance.who_owes is None
        assert balance.amount == 0
        assert balance.shared_expenses == Decimal("200")
        assert balance.party_a_balance == 0
        assert balance.party_b_balance == 0

    def test_unbalanced_case(self, shared_category):
        """One party fronting a shared cost is owed half of it."""
        balance = settle([make_txn(200, Buyer.PARTY_A)], [shared_category], MONTH)
        assert balance.per_person_share == Decimal("100")
        assert balance.party_a_balance == Decimal("100")
        assert balance.party_b_balance == Decimal("-100")
        assert balance.who_owes == Party.PARTY_B
        assert balance.owed_to == Party.PARTY_A
        assert balance.amount == Decimal("100")

    def test_joint_payment_neutrality(self, shared_category):
        """Joint spend on a shared category is absorbed symmetrically."""
        balance = settle([make_txn(200, Buyer.JOINT)], [shared_category], MONTH)
        assert balance.party_a_spent == 0
        assert balance.party_b_spent == 0
        assert balance.joint_spent == Decimal("200")
        assert balance.per_person_share == Decimal("100")
        assert balance.party_a_balance == Decimal("-100")
        assert balance.party_b_balance == Decimal("-100")
        assert balance.who_owes is None
        assert balance.amount == 0

    def test_non_shared_exclusion(self, shared_category, personal_category):
        """Personal-category spend only moves the payer's spent total."""
        categories = [shared_category, personal_category]
        base = [
            make_txn(300, Buyer.PARTY_A, category_id=1),
            make_txn(100, Buyer.PARTY_B, category_id=1),
        ]
        before = settle(base, categories, MONTH)
        after = settle(
            base + [make_txn(500, Buyer.PARTY_A, category_id=2)],
            categories,
            MONTH,
        )
        assert after.party_a_spent == before.party_a_spent + 500
        assert after.shared_expenses == before.shared_expenses == Decimal("400")
        assert after.per_person_share == before.per_person_share
        assert before.who_owes == after.who_owes == Party.PARTY_B
        assert before.amount == after.amount == Decimal("100")

    def test_non_shared_spend_alone(self, shared_category, personal_category):
        balance = settle(
            [make_txn(500, Buyer.PARTY_A, category_id=2)],
            [shared_category, personal_category],
            MONTH,
        )
        assert balance.party_a_spent == Decimal("500")
        assert balance.shared_expenses == 0
        assert balance.per_person_share == 0
        assert balance.who_owes is None
        assert balance.amount == 0

    def test_non_shared_joint_spend_excluded(self, personal_category):
        balance = settle([make_txn(80, Buyer.JOINT, category_id=2)], [personal_category], MONTH)
        assert balance.joint_spent == Decimal("80")
        assert balance.shared_expenses == 0
        assert balance.who_owes is None

    def test_no_shared_categories(self, personal_category):
        """Without shared categories balances equal raw spend and nothing is owed."""
        txns = [
            make_txn(50, Buyer.PARTY_A, category_id=2),
            make_txn(20, Buyer.PARTY_B, category_id=2),
        ]
        balance = settle(txns, [personal_category], MONTH)
        assert balance.shared_expenses == 0
        assert balance.party_a_balance == Decimal("50")
        assert balance.party_b_balance == Decimal("20")
        assert balance.who_owes is None
        assert balance.amount == 0

    def test_other_months_ignored(self, shared_category):
        txns = [
            make_txn(200, Buyer.PARTY_A, on="2024-02-28"),
            make_txn(200, Buyer.PARTY_B, on="2024-04-01"),
        ]
        balance = settle(txns, [shared_category], MONTH)
        assert balance == BalanceInfo(month=MONTH)

    def test_empty_month(self, categories):
        balance = settle([], categories, MONTH)
        assert balance.who_owes is None
        assert balance.amount == 0
        assert balance.month == MONTH

    def test_mixed_household_month(self, categories):
        """A realistic month across shared and personal categories."""
        txns = [
            make_txn("1200.00", Buyer.JOINT, category_id=1),    # bills, shared
            make_txn("150.00", Buyer.PARTY_A, category_id=2),   # groceries, shared
            make_txn("45.00", Buyer.PARTY_B, category_id=3),    # eating out, shared
            make_txn("60.00", Buyer.PARTY_B, category_id=6),    # personal
        ]
        balance = settle(txns, categories, MONTH)
        assert balance.shared_expenses == Decimal("1395.00")
        assert balance.per_person_share == Decimal("697.50")
        assert balance.party_a_balance == Decimal("-547.50")
        assert balance.party_b_balance == Decimal("-592.50")
        assert balance.party_a_contribution == Decimal("-547.50")
        assert balance.party_b_contribution == Decimal("-652.50")
        assert balance.who_owes == Party.PARTY_B
        assert balance.amount == Decimal("52.50")


class TestSettlementSymmetry:
    """Swapping the two parties mirrors the result."""

    @pytest.mark.parametrize("amounts", [
        [(120, Buyer.PARTY_A, 1), (30, Buyer.PARTY_B, 1)],
        [(10, Buyer.PARTY_B, 1), (400, Buyer.JOINT, 1), (75, Buyer.PARTY_A, 2)],
        [(55.55, Buyer.PARTY_A, 2), (55.55, Buyer.PARTY_B, 1)],
    ])
    def test_swap_parties(self, amounts, shared_category, personal_category):
        categories = [shared_category, personal_category]
        original = [make_txn(a, b, category_id=c) for a, b, c in amounts]
        swapped = [make_txn(a, _swap(b), category_id=c) for a, b, c in amounts]

        left = settle(original, categories, MONTH)
        right = settle(swapped, categories, MONTH)

        assert left.party_a_spent == right.party_b_spent
        assert left.party_b_spent == right.party_a_spent
        assert left.joint_spent == right.joint_spent
        assert left.amount == right.amount
        if left.who_owes is None:
            assert right.who_owes is None
        else:
            assert right.who_owes == left.who_owes.other


class TestTolerance:
    """Differences at or below the tolerance count as settled."""

    def test_default_tolerance(self):
        assert DEFAULT_TOLERANCE == Decimal("1.00")
        assert SettlementCalculator().tolerance == Decimal("1.00")

    def test_difference_at_tolerance_is_settled(self, shared_category):
        # balances +0.50 / -0.50 -> difference exactly 1.00
        txns = [make_txn("50.50", Buyer.PARTY_A), make_txn("49.50", Buyer.PARTY_B)]
        balance = settle(txns, [shared_category], MONTH)
        assert balance.who_owes is None
        assert balance.amount == 0

    def test_difference_above_tolerance_is_owed(self, shared_category):
        txns = [make_txn("50.51", Buyer.PARTY_A), make_txn("49.49", Buyer.PARTY_B)]
        balance = settle(txns, [shared_category], MONTH)
        assert balance.who_owes == Party.PARTY_B
        assert balance.amount == Decimal("0.51")

    def test_custom_tolerance(self, shared_category):
        txns = [make_txn(60, Buyer.PARTY_A), make_txn(40, Buyer.PARTY_B)]
        assert settle(txns, [shared_category], MONTH, tolerance=Decimal("25")).who_owes is None
        assert settle(txns, [shared_category], MONTH, tolerance=Decimal("0")).amount == Decimal("10")

    def test_negative_tolerance_rejected(self):
        with pytest.raises(ValueError):
            SettlementCalculator(Decimal("-1"))


class TestDescribe:
    """Tests for the balance card sentence."""

    def test_describe_owing(self, shared_category):
        balance = settle([make_txn(200, Buyer.PARTY_A)], [shared_category], MONTH)
        text = SettlementCalculator.describe(balance, "Bruno", "Isadora")
        assert text == "Isadora owes Bruno $100.00"

    def test_describe_square(self):
        assert SettlementCalculator.describe(BalanceInfo(month=MONTH)) == "All square"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
