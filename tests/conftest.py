"""Shared fixtures for the Household Ledger tests."""

from datetime import date
from decimal import Decimal

import pytest

from household_ledger.config import LedgerSettings
from household_ledger.models.budget import (
    Buyer,
    Category,
    Transaction,
    default_categories,
)


@pytest.fixture
def settings() -> LedgerSettings:
    """Settings that ignore the developer's environment and .env file."""
    return LedgerSettings(_env_file=None)


@pytest.fixture
def categories() -> list[Category]:
    return default_categories("Bruno", "Isadora")


@pytest.fixture
def shared_category() -> Category:
    return Category(id=1, name="Groceries", limit=Decimal("800"), shared_flag=True)


@pytest.fixture
def personal_category() -> Category:
    return Category(id=2, name="Personal", limit=Decimal("500"), shared_flag=False)


def make_txn(
    amount,
    buyer: Buyer,
    category_id: int = 1,
    on: str = "2024-03-10",
    txn_id: str = None,
    **extra,
) -> Transaction:
    """Terse Transaction builder for tests."""
    fields = dict(
        date=date.fromisoformat(on),
        amount=Decimal(str(amount)),
        category_id=category_id,
        buyer=buyer,
        **extra,
    )
    if txn_id is not None:
        fields["id"] = txn_id
    return Transaction(**fields)
