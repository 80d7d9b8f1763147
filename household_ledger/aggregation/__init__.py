"""Monthly aggregation package."""

from household_ledger.aggregation.aggregator import (
    available_budget,
    current_month_key,
    filter_history,
    monthly_progress,
    months_with_activity,
    rollup_for_month,
    transactions_for_month,
    unassigned_spent,
)

__all__ = [
    "available_budget",
    "current_month_key",
    "filter_history",
    "monthly_progress",
    "months_with_activity",
    "rollup_for_month",
    "transactions_for_month",
    "unassigned_spent",
]
