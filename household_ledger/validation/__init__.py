"""Entry validation package."""

from household_ledger.validation.validator import (
    InvalidMonthError,
    InvalidTransactionError,
    LedgerError,
    TransactionValidator,
    is_valid_month_key,
    validate_month_key,
)

__all__ = [
    "InvalidMonthError",
    "InvalidTransactionError",
    "LedgerError",
    "TransactionValidator",
    "is_valid_month_key",
    "validate_month_key",
]
