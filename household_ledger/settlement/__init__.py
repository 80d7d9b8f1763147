"""Settlement package."""

from household_ledger.settlement.calculator import (
    DEFAULT_TOLERANCE,
    SettlementCalculator,
    settle,
)

__all__ = ["DEFAULT_TOLERANCE", "SettlementCalculator", "settle"]
