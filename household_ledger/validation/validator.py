"""
Two-Stage Entry Validation

DESIGN DECISION: Transactions are validated at the entry boundary, never
inside the budget engine. The engine assumes well-formed input.

STAGE 1 - SCHEMA VALIDATION:
- Type checking (numeric amount, ISO date, known buyer)
- Required field presence
- Non-negative amounts
- This is pydantic parsing the raw record into a Transaction

STAGE 2 - SEMANTIC VALIDATION:
- Category id must exist in the category list
- Future date detection
- Absurd amount detection
- This catches records that parse but make no sense for this household

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the entry form can show them.
"""

import re
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Optional, Sequence, Union

from pydantic import ValidationError

from household_ledger.config import LedgerSettings, get_settings
from household_ledger.models.budget import (
    MONTH_KEY_PATTERN,
    Category,
    Transaction,
    ValidationIssue,
    ValidationResult,
)


_MONTH_KEY_RE = re.compile(MONTH_KEY_PATTERN)


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class InvalidTransactionError(LedgerError):
    """A transaction failed entry validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Invalid transaction: {messages}")


class InvalidMonthError(LedgerError):
    """A month key is not YYYY-MM."""
    pass


def is_valid_month_key(month: Any) -> bool:
    return isinstance(month, str) and bool(_MONTH_KEY_RE.match(month))


def validate_month_key(month: Any) -> str:
    """
    Check a selected month key.

    Returns the key unchanged, or raises InvalidMonthError.
    """
    if not is_valid_month_key(month):
        raise InvalidMonthError(f"Month must be YYYY-MM, got {month!r}")
    return month


class TransactionValidator:
    """
    Validates transactions through a two-stage pipeline.

    Stage 1: Schema validation (pydantic parsing)
    Stage 2: Semantic validation (needs the category list)
    """

    def __init__(
        self,
        categories: Sequence[Category],
        settings: Optional[LedgerSettings] = None,
    ):
        """
        Initialize validator.

        Args:
            categories: The household's category list.
            settings: Thresholds; defaults to the cached settings.
        """
        self._category_ids = {category.id for category in categories}
        self._settings = settings or get_settings()

    def _validate_schema(
        self,
        data: Union[Transaction, dict[str, Any]],
    ) -> tuple[Optional[Transaction], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (parsed_transaction_or_None, list_of_issues)
        """
        if isinstance(data, Transaction):
            # Re-validate in case the model was built with model_construct
            data = data.model_dump()

        try:
            return Transaction.model_validate(data), []
        except ValidationError as e:
            issues = []
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "transaction"
                issues.append(ValidationIssue(
                    field=field,
                    issue_type=error["type"],
                    message=f"{field}: {error['msg']}",
                    severity="error",
                ))
            return None, issues

    def _validate_semantic(
        self,
        transaction: Transaction,
        today: date,
    ) -> list[ValidationIssue]:
        """
        Stage 2: Semantic validation.

        Checks:
        - Category exists
        - Future dates
        - Absurd amounts
        """
        issues = []

        if transaction.category_id not in self._category_ids:
            issues.append(ValidationIssue(
                field="category_id",
                issue_type="unknown_category",
                message=f"Category {transaction.category_id} does not exist",
                severity="error",
                suggested_fix="Pick one of the configured categories",
            ))

        max_future_days = self._settings.future_date_tolerance_days
        if transaction.date > today + timedelta(days=max_future_days):
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"Date ({transaction.date}) is in the future",
                severity="warning",
                suggested_fix="Please verify the date is correct",
            ))

        max_amount = self._settings.max_transaction_amount
        if transaction.amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({self._settings.format_amount(transaction.amount)}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))
        elif transaction.amount == Decimal("0"):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="Amount is zero",
                severity="warning",
            ))

        return issues

    def validate(
        self,
        data: Union[Transaction, dict[str, Any]],
        today: Optional[date] = None,
    ) -> ValidationResult:
        """
        Run the full two-stage validation pipeline.

        Args:
            data: A Transaction or a raw record from the entry form
            today: Reference date for the future-date check

        Returns:
            ValidationResult with all issues found
        """
        transaction, issues = self._validate_schema(data)

        # Only run stage 2 if stage 1 passes
        if transaction is not None:
            issues.extend(self._validate_semantic(transaction, today or date.today()))

        transaction_id = transaction.id if transaction else None
        if transaction_id is None and isinstance(data, dict):
            raw_id = data.get("id")
            transaction_id = str(raw_id) if raw_id is not None else None

        is_valid = not any(issue.severity == "error" for issue in issues)

        return ValidationResult(
            transaction_id=transaction_id,
            is_valid=is_valid,
            issues=issues,
            transaction=transaction if is_valid else None,
        )

    def ensure_valid(
        self,
        data: Union[Transaction, dict[str, Any]],
        today: Optional[date] = None,
    ) -> Transaction:
        """Validate and return the parsed transaction, or raise InvalidTransactionError."""
        result = self.validate(data, today=today)
        if not result.is_valid:
            raise InvalidTransactionError(result)
        return result.transaction
