"""
Settlement Calculator

Works out who owes whom for one month.

Each party is measured against an even split of the month's shared
expenses:

    shared_expenses  = spend in shared categories, whoever paid
    per_person_share = shared_expenses / 2
    party balance    = what the party paid personally - per_person_share

Joint-paid transactions raise the shared pool (when their category is
shared) but are never credited to either person. Non-shared categories
never enter the pool, even when paid jointly.

The direction and size of the transfer come from each party's net
contribution to the shared pool (their shared-category payments minus
their share). Personal-category spend shows up in the party's spent total
and balance but never moves the settlement. When every transaction is in
a shared category the two views coincide.

The party with the lower contribution owes half the gap; paying it makes
both contributions equal. Gaps at or below the tolerance count as settled.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from household_ledger.aggregation.aggregator import transactions_for_month
from household_ledger.models.budget import (
    BalanceInfo,
    Buyer,
    Category,
    Party,
    Transaction,
)


DEFAULT_TOLERANCE = Decimal("1.00")

ZERO = Decimal("0")
TWO = Decimal("2")


class SettlementCalculator:
    """
    Settles one month between the two parties.

    Stateless apart from the tolerance; safe to reuse across calls.
    """

    def __init__(self, tolerance: Decimal = DEFAULT_TOLERANCE):
        if tolerance < 0:
            raise ValueError("Settlement tolerance cannot be negative")
        self._tolerance = tolerance

    @property
    def tolerance(self) -> Decimal:
        return self._tolerance

    def settle(
        self,
        transactions: Iterable[Transaction],
        categories: Sequence[Category],
        month: str,
    ) -> BalanceInfo:
        """Compute balances and the owed amount for `month`."""
        monthly = transactions_for_month(transactions, month)
        shared_ids = {c.id for c in categories if c.shared_flag}

        spent = {buyer: ZERO for buyer in Buyer}
        shared_paid = {buyer: ZERO for buyer in Buyer}
        for txn in monthly:
            spent[txn.buyer] += txn.amount
            if txn.category_id in shared_ids:
                shared_paid[txn.buyer] += txn.amount

        shared_expenses = sum(shared_paid.values(), ZERO)
        per_person_share = shared_expenses / TWO

        party_a_contribution = shared_paid[Buyer.PARTY_A] - per_person_share
        party_b_contribution = shared_paid[Buyer.PARTY_B] - per_person_share
        difference = abs(party_a_contribution - party_b_contribution)

        who_owes: Optional[Party] = None
        amount = ZERO
        if difference > self._tolerance:
            if party_a_contribution < party_b_contribution:
                who_owes = Party.PARTY_A
            else:
                who_owes = Party.PARTY_B
            amount = difference / TWO

        return BalanceInfo(
            month=month,
            party_a_spent=spent[Buyer.PARTY_A],
            party_b_spent=spent[Buyer.PARTY_B],
            joint_spent=spent[Buyer.JOINT],
            party_a_shared_spent=shared_paid[Buyer.PARTY_A],
            party_b_shared_spent=shared_paid[Buyer.PARTY_B],
            shared_expenses=shared_expenses,
            per_person_share=per_person_share,
            party_a_balance=spent[Buyer.PARTY_A] - per_person_share,
            party_b_balance=spent[Buyer.PARTY_B] - per_person_share,
            who_owes=who_owes,
            amount=amount,
        )

    @staticmethod
    def describe(
        balance: BalanceInfo,
        party_a_name: str = "Party A",
        party_b_name: str = "Party B",
        currency_symbol: str = "$",
    ) -> str:
        """One-line summary for the balance card."""
        if balance.who_owes is None:
            return "All square"
        names = {Party.PARTY_A: party_a_name, Party.PARTY_B: party_b_name}
        return (
            f"{names[balance.who_owes]} owes {names[balance.owed_to]} "
            f"{currency_symbol}{balance.amount:,.2f}"
        )


def settle(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    month: str,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> BalanceInfo:
    """Functional shortcut for SettlementCalculator(tolerance).settle(...)."""
    return SettlementCalculator(tolerance).settle(transactions, categories, month)
