"""
Core Data Models for Household Ledger

These models define the strict schemas for all data flowing through the
budget engine. They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for storage and presentation
4. Keep derived values (rollups, balances) separate from stored records

DESIGN DECISION: Money is always Decimal with two places.
Floats are never used for stored amounts, so settlement arithmetic is exact
and the tolerance only has to absorb rounding from user entry.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


MONTH_KEY_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

Money = Annotated[Decimal, Field(ge=0, decimal_places=2)]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Buyer(str, Enum):
    """
    Who physically paid for a transaction.

    JOINT means the shared account/card paid. Joint spend is never credited
    to either individual when settling.
    """
    PARTY_A = "party_a"
    PARTY_B = "party_b"
    JOINT = "joint"


class Party(str, Enum):
    """One of the two co-funding people. Used for the settlement direction."""
    PARTY_A = "party_a"
    PARTY_B = "party_b"

    @property
    def other(self) -> "Party":
        return Party.PARTY_B if self is Party.PARTY_A else Party.PARTY_A


class BudgetStatus(str, Enum):
    """Colour band of a category progress bar."""
    ON_TRACK = "on_track"    # green
    WARNING = "warning"      # yellow
    CRITICAL = "critical"    # red


# =============================================================================
# REFERENCE DATA
# =============================================================================

class Category(BaseModel):
    """
    A spending category with a monthly limit.

    Categories are configuration data: they are frozen once built and
    transactions never mutate them.

    shared_flag decides whether spend in this category is split 50/50
    between the two parties for settlement purposes.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        description="Unique category id"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )
    limit: Money = Field(
        ...,
        description="Monthly spending limit"
    )
    shared_flag: bool = Field(
        ...,
        description="Is spend in this category split between both parties?"
    )
    emoji: Optional[str] = Field(
        default=None,
        max_length=8,
        description="Display label"
    )


def default_categories(
    party_a_name: str = "Bruno",
    party_b_name: str = "Isadora",
) -> list[Category]:
    """
    The stock household category set.

    Communal costs are shared; the two personal categories are not.
    """
    return [
        Category(id=1, name="Monthly Bills", emoji="📆",
                 limit=Decimal("2000"), shared_flag=True),
        Category(id=2, name="Groceries & Pharmacy", emoji="🛒",
                 limit=Decimal("800"), shared_flag=True),
        Category(id=3, name="Eating Out & Entertainment", emoji="🍽️",
                 limit=Decimal("400"), shared_flag=True),
        Category(id=4, name="Household Items", emoji="🧹",
                 limit=Decimal("300"), shared_flag=True),
        Category(id=5, name=f"Personal ({party_a_name})", emoji="👤",
                 limit=Decimal("500"), shared_flag=False),
        Category(id=6, name=f"Personal ({party_b_name})", emoji="👤",
                 limit=Decimal("500"), shared_flag=False),
    ]


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Transaction(BaseModel):
    """
    A single dated expense.

    Created by the entry flow, replaced wholesale by the edit flow and
    deleted by id. Ids are opaque; no two transactions share one.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=lambda: uuid4().hex,
        min_length=1,
        description="Opaque unique transaction id"
    )
    date: datetime.date = Field(
        ...,
        description="Calendar date of the expense (ISO YYYY-MM-DD)"
    )
    amount: Money = Field(
        ...,
        description="Amount spent"
    )
    category_id: int = Field(
        ...,
        description="Foreign key into the category list"
    )
    buyer: Buyer = Field(
        ...,
        description="Who paid"
    )
    location: str = Field(
        default="",
        max_length=200,
    )
    description: str = Field(
        default="",
        max_length=1000,
        description="Free-text notes"
    )

    @field_validator("date", mode="before")
    @classmethod
    def require_iso_date(cls, v):
        """Only accept canonical YYYY-MM-DD strings (or real dates)."""
        if isinstance(v, str) and (len(v) != 10 or v[4] != "-" or v[7] != "-"):
            raise ValueError(f"Date must be YYYY-MM-DD, got {v!r}")
        return v

    @property
    def month_key(self) -> str:
        """YYYY-MM prefix of the ISO date."""
        return self.date.isoformat()[:7]


# =============================================================================
# DERIVED VALUES (never stored)
# =============================================================================

class CategoryRollup(BaseModel):
    """
    Spend in one category for one month.

    Recomputed on demand from the transaction list; never persisted.
    """
    model_config = ConfigDict(frozen=True)

    category: Category
    spent: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Sum of the month's transaction amounts in this category"
    )

    @property
    def remaining(self) -> Decimal:
        """Limit left to spend. Negative when over budget."""
        return self.category.limit - self.spent

    @property
    def percent_used(self) -> float:
        """Share of the limit spent, in percent (not capped at 100)."""
        if self.category.limit == 0:
            return 100.0 if self.spent > 0 else 0.0
        return float(self.spent / self.category.limit * 100)

    def status(
        self,
        warning_percent: float = 70.0,
        critical_percent: float = 90.0,
    ) -> BudgetStatus:
        """Map percent used onto the progress-bar colour band."""
        pct = self.percent_used
        if pct > critical_percent:
            return BudgetStatus.CRITICAL
        if pct > warning_percent:
            return BudgetStatus.WARNING
        return BudgetStatus.ON_TRACK


class BalanceInfo(BaseModel):
    """
    Result of settling one month between the two parties.

    party_x_balance is what the party paid minus their half of the shared
    pool. who_owes and amount are driven by the shared-category part of
    that (party_x_contribution); a positive contribution means the party
    fronted more than their half and is owed money.
    """
    model_config = ConfigDict(frozen=True)

    month: str = Field(..., description="Month key (YYYY-MM)")

    party_a_spent: Decimal = Decimal("0")
    party_b_spent: Decimal = Decimal("0")
    joint_spent: Decimal = Decimal("0")

    # Each party's payments into shared categories only
    party_a_shared_spent: Decimal = Decimal("0")
    party_b_shared_spent: Decimal = Decimal("0")

    shared_expenses: Decimal = Decimal("0")
    per_person_share: Decimal = Decimal("0")
    party_a_balance: Decimal = Decimal("0")
    party_b_balance: Decimal = Decimal("0")

    who_owes: Optional[Party] = Field(
        default=None,
        description="Party that underpaid, or None when square"
    )
    amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Transfer that equalizes both contributions"
    )

    @property
    def party_a_contribution(self) -> Decimal:
        """Party A's shared-category payments minus their fair share."""
        return self.party_a_shared_spent - self.per_person_share

    @property
    def party_b_contribution(self) -> Decimal:
        return self.party_b_shared_spent - self.per_person_share

    @property
    def is_settled(self) -> bool:
        return self.who_owes is None

    @property
    def owed_to(self) -> Optional[Party]:
        return self.who_owes.other if self.who_owes else None


class MonthlyOverview(BaseModel):
    """Everything the dashboard needs for one selected month."""

    month: str = Field(..., description="Month key (YYYY-MM)")
    rollups: list[CategoryRollup] = Field(default_factory=list)

    total_limit: Decimal = Decimal("0")
    total_spent: Decimal = Decimal("0")
    available_budget: Decimal = Field(
        default=Decimal("0"),
        description="Total limit minus total spent; negative if over budget"
    )
    percent_used: float = Field(
        default=0.0,
        ge=0.0,
        description="Monthly progress across all categories"
    )
    unassigned_spent: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Spend whose category id matches no known category"
    )

    balance: BalanceInfo


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one transaction at the entry boundary.

    Warnings don't block saving; errors do.
    """

    transaction_id: Optional[str] = Field(
        default=None,
        description="ID of the transaction being validated, if known"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    transaction: Optional[Transaction] = Field(
        default=None,
        description="The parsed transaction when parsing succeeded"
    )

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]
