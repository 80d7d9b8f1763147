"""
Data Models Package

This package contains all Pydantic models used in the Household Ledger.
All data flowing through the engine must conform to these schemas.
"""

from household_ledger.models.budget import (
    MONTH_KEY_PATTERN,
    BalanceInfo,
    BudgetStatus,
    Buyer,
    Category,
    CategoryRollup,
    MonthlyOverview,
    Party,
    Transaction,
    ValidationIssue,
    ValidationResult,
    default_categories,
)
from household_ledger.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Budget models
    "MONTH_KEY_PATTERN",
    "BalanceInfo",
    "BudgetStatus",
    "Buyer",
    "Category",
    "CategoryRollup",
    "MonthlyOverview",
    "Party",
    "Transaction",
    "ValidationIssue",
    "ValidationResult",
    "default_categories",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
