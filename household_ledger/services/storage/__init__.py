"""
Storage Services Package

Provides the abstract transaction store interface and an in-memory
implementation. The budget engine never imports this package; only the
ledger facade does.
"""

from household_ledger.services.storage.interface import (
    DuplicateError,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from household_ledger.services.storage.memory import InMemoryTransactionStorage

__all__ = [
    # Interfaces
    "TransactionStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryTransactionStorage",
]
