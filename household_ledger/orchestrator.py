"""
Main Orchestrator for Household Ledger

This module ties together the store, the entry validator, the budget
engine and the audit trail, and defines the flows a UI drives:
1. Entry   (raw record → validate → store → audit)
2. Edit    (raw record → validate → replace in full → audit)
3. Delete  (id → remove → audit)
4. Overview (month → rollups + available budget + settlement)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing reaches the store without passing validation
- The engine only ever sees a snapshot list, never the store itself
- Every mutation is audited
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence, Union
from uuid import UUID

from household_ledger.aggregation import (
    available_budget,
    filter_history,
    monthly_progress,
    months_with_activity,
    rollup_for_month,
    unassigned_spent,
)
from household_ledger.audit import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
)
from household_ledger.config import LedgerSettings, get_settings
from household_ledger.models.budget import (
    BalanceInfo,
    BudgetStatus,
    Buyer,
    Category,
    CategoryRollup,
    MonthlyOverview,
    Transaction,
    default_categories,
)
from household_ledger.services.storage import (
    InMemoryTransactionStorage,
    TransactionStorageInterface,
)
from household_ledger.settlement import SettlementCalculator
from household_ledger.validation import (
    InvalidTransactionError,
    TransactionValidator,
    validate_month_key,
)


TransactionInput = Union[Transaction, dict[str, Any]]


class HouseholdLedger:
    """
    Facade over one household's categories and transactions.

    Not thread-safe: callers serialize mutations.
    """

    def __init__(
        self,
        categories: Optional[Sequence[Category]] = None,
        storage: Optional[TransactionStorageInterface] = None,
        validator: Optional[TransactionValidator] = None,
        calculator: Optional[SettlementCalculator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[LedgerSettings] = None,
    ):
        self._settings = settings or get_settings()
        if categories is None:
            categories = default_categories(
                self._settings.party_a_name,
                self._settings.party_b_name,
            )
        self._categories = tuple(categories)
        if len({c.id for c in self._categories}) != len(self._categories):
            raise ValueError("Category ids must be unique")

        # An empty store is falsy, so compare against None explicitly
        self._storage = storage if storage is not None else InMemoryTransactionStorage()
        self._validator = validator or TransactionValidator(self._categories, self._settings)
        self._calculator = calculator or SettlementCalculator(
            self._settings.settlement_tolerance
        )
        self._audit_logger = audit_logger

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def settings(self) -> LedgerSettings:
        return self._settings

    def get_category(self, category_id: int) -> Optional[Category]:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _validated(
        self,
        data: TransactionInput,
        correlation_id: Optional[UUID],
        today: Optional[date],
    ) -> Transaction:
        result = self._validator.validate(data, today=today)
        if not result.is_valid:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    transaction_id=result.transaction_id,
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=correlation_id,
                )
            raise InvalidTransactionError(result)
        return result.transaction

    def add_transaction(
        self,
        data: TransactionInput,
        correlation_id: Optional[UUID] = None,
        today: Optional[date] = None,
    ) -> Transaction:
        """
        Validate and store a new transaction.

        Raises:
            InvalidTransactionError: If validation finds errors
            DuplicateError: If the id is already taken
        """
        transaction = self._validated(data, correlation_id, today)
        self._storage.add(transaction)
        if self._audit_logger:
            self._audit_logger.log_transaction_added(transaction, correlation_id)
        return transaction

    def edit_transaction(
        self,
        transaction_id: str,
        data: TransactionInput,
        correlation_id: Optional[UUID] = None,
        today: Optional[date] = None,
    ) -> Transaction:
        """
        Replace a transaction in full. The id is taken from `transaction_id`.

        Raises:
            InvalidTransactionError: If validation finds errors
            NotFoundError: If no transaction has that id
        """
        if isinstance(data, Transaction):
            data = data.model_dump()
        data = {**data, "id": transaction_id}

        transaction = self._validated(data, correlation_id, today)
        previous = self._storage.replace(transaction)
        if self._audit_logger:
            self._audit_logger.log_transaction_updated(previous, transaction, correlation_id)
        return transaction

    def delete_transaction(
        self,
        transaction_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Remove a transaction by id.

        Raises:
            NotFoundError: If no transaction has that id
        """
        removed = self._storage.delete(transaction_id)
        if self._audit_logger:
            self._audit_logger.log_transaction_deleted(transaction_id, correlation_id)
        return removed

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def transactions(self) -> list[Transaction]:
        return self._storage.list_all()

    def history(
        self,
        month: Optional[str] = None,
        category_id: Optional[int] = None,
        buyer: Optional[Buyer] = None,
    ) -> list[Transaction]:
        """History table rows, newest first."""
        if month is not None:
            validate_month_key(month)
        return filter_history(
            self._storage.list_all(),
            month=month,
            category_id=category_id,
            buyer=buyer,
        )

    def months(self, today: Optional[date] = None) -> list[str]:
        """Month keys available for navigation."""
        return months_with_activity(self._storage.list_all(), today=today)

    def rollups(self, month: str) -> list[CategoryRollup]:
        validate_month_key(month)
        return rollup_for_month(self._storage.list_all(), self._categories, month)

    def category_status(self, rollup: CategoryRollup) -> BudgetStatus:
        return rollup.status(
            self._settings.warning_threshold_percent,
            self._settings.critical_threshold_percent,
        )

    def balance(self, month: str) -> BalanceInfo:
        validate_month_key(month)
        return self._calculator.settle(self._storage.list_all(), self._categories, month)

    def describe_balance(self, balance: BalanceInfo) -> str:
        return self._calculator.describe(
            balance,
            party_a_name=self._settings.party_a_name,
            party_b_name=self._settings.party_b_name,
            currency_symbol=self._settings.currency_symbol,
        )

    def overview(
        self,
        month: str,
        correlation_id: Optional[UUID] = None,
    ) -> MonthlyOverview:
        """
        Dashboard data for one month.

        Rollups and settlement are computed from the same snapshot.

        Raises:
            InvalidMonthError: If `month` is not YYYY-MM
        """
        validate_month_key(month)
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._storage.list_all()

        rollups = rollup_for_month(snapshot, self._categories, month)
        balance = self._calculator.settle(snapshot, self._categories, month)

        total_limit = sum((c.limit for c in self._categories), Decimal("0"))
        total_spent = sum((r.spent for r in rollups), Decimal("0"))
        overview = MonthlyOverview(
            month=month,
            rollups=rollups,
            total_limit=total_limit,
            total_spent=total_spent,
            available_budget=available_budget(rollups),
            percent_used=monthly_progress(rollups),
            unassigned_spent=unassigned_spent(snapshot, self._categories, month),
            balance=balance,
        )

        if self._audit_logger:
            self._audit_logger.log_rollup_computed(
                month=month,
                total_spent=str(total_spent),
                available_budget=str(overview.available_budget),
                correlation_id=correlation_id,
            )
            self._audit_logger.log_settlement_computed(balance, correlation_id)

        return overview


def create_ledger(
    transactions: Optional[Iterable[TransactionInput]] = None,
    categories: Optional[Sequence[Category]] = None,
    settings: Optional[LedgerSettings] = None,
) -> HouseholdLedger:
    """
    Factory function to create a fully wired ledger.

    Configures logging, attaches an audit logger and loads any existing
    transactions through the entry validator.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    ledger = HouseholdLedger(
        categories=categories,
        settings=settings,
        audit_logger=AuditLogger(),
    )
    for data in transactions or ():
        ledger.add_transaction(data)
    return ledger
