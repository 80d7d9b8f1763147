"""
Monthly Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and stateless.
Every function takes the full transaction snapshot and returns freshly
computed values. Nothing is cached between calls, so a rollup can never
go stale after an add/edit/delete.

Month matching compares the YYYY-MM prefix of each transaction's ISO date
with the selected month key. A month key that is not YYYY-MM simply
matches nothing; the entry boundary is responsible for rejecting it.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from household_ledger.models.budget import (
    Buyer,
    Category,
    CategoryRollup,
    Transaction,
)


ZERO = Decimal("0")


def current_month_key(today: Optional[date] = None) -> str:
    """Month key for today (or the given date)."""
    return (today or date.today()).isoformat()[:7]


def transactions_for_month(
    transactions: Iterable[Transaction],
    month: str,
) -> list[Transaction]:
    """The slice of transactions dated inside `month`, in input order."""
    return [txn for txn in transactions if txn.month_key == month]


def rollup_for_month(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    month: str,
) -> list[CategoryRollup]:
    """
    Per-category spend for one month.

    Output order follows `categories`. Every category appears exactly once;
    categories with no spend get spent=0. Transactions pointing at an
    unknown category id are not counted in any rollup.
    """
    spent_by_category: dict[int, Decimal] = {}
    for txn in transactions_for_month(transactions, month):
        spent_by_category[txn.category_id] = (
            spent_by_category.get(txn.category_id, ZERO) + txn.amount
        )

    return [
        CategoryRollup(
            category=category,
            spent=spent_by_category.get(category.id, ZERO),
        )
        for category in categories
    ]


def available_budget(rollups: Iterable[CategoryRollup]) -> Decimal:
    """Sum of limits minus sum of spend. Negative when over budget."""
    rollups = list(rollups)
    total_limit = sum((r.category.limit for r in rollups), ZERO)
    total_spent = sum((r.spent for r in rollups), ZERO)
    return total_limit - total_spent


def monthly_progress(rollups: Iterable[CategoryRollup]) -> float:
    """Percent of the combined monthly limit already spent."""
    rollups = list(rollups)
    total_limit = sum((r.category.limit for r in rollups), ZERO)
    total_spent = sum((r.spent for r in rollups), ZERO)
    if total_limit == 0:
        return 100.0 if total_spent > 0 else 0.0
    return float(total_spent / total_limit * 100)


def unassigned_spent(
    transactions: Iterable[Transaction],
    categories: Sequence[Category],
    month: str,
) -> Decimal:
    """Spend in `month` whose category id matches none of `categories`."""
    known = {category.id for category in categories}
    return sum(
        (
            txn.amount
            for txn in transactions_for_month(transactions, month)
            if txn.category_id not in known
        ),
        ZERO,
    )


def months_with_activity(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> list[str]:
    """
    Distinct month keys with at least one transaction, plus the current month.

    Sorted ascending; lexical order of YYYY-MM equals chronological order.
    """
    months = {txn.month_key for txn in transactions}
    months.add(current_month_key(today))
    return sorted(months)


def filter_history(
    transactions: Iterable[Transaction],
    month: Optional[str] = None,
    category_id: Optional[int] = None,
    buyer: Optional[Buyer] = None,
) -> list[Transaction]:
    """
    Transactions for the history table, newest first.

    Each filter left as None means "all". Same-day entries are ordered by id
    so the listing is stable across calls.
    """
    results = [
        txn for txn in transactions
        if (month is None or txn.month_key == month)
        and (category_id is None or txn.category_id == category_id)
        and (buyer is None or txn.buyer == buyer)
    ]
    results.sort(key=lambda txn: txn.id)
    results.sort(key=lambda txn: txn.date, reverse=True)
    return results
