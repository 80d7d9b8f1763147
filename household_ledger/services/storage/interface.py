"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for transaction storage.
This allows us to:
1. Keep the budget engine unaware of any persistence format
2. Use in-memory storage for testing and for embedding in a UI
3. Add a file or database backend later without touching the engine

The interface is intentionally simple - we're not building a full ORM.
Just the operations the entry, edit and history flows need.
"""

from abc import ABC, abstractmethod
from typing import Optional

from household_ledger.models.budget import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for transaction storage operations.

    Implementations keep transactions in insertion order and guarantee
    unique ids. They are not required to be thread-safe; callers serialize
    mutations.
    """

    @abstractmethod
    def add(self, transaction: Transaction) -> Transaction:
        """
        Store a new transaction.

        Raises:
            DuplicateError: If a transaction with the same id exists
        """
        pass

    @abstractmethod
    def replace(self, transaction: Transaction) -> Transaction:
        """
        Replace an existing transaction in full (matched by id).

        Returns:
            The previous version of the transaction

        Raises:
            NotFoundError: If no transaction has that id
        """
        pass

    @abstractmethod
    def delete(self, transaction_id: str) -> Transaction:
        """
        Delete a transaction by id.

        Returns:
            The deleted transaction

        Raises:
            NotFoundError: If no transaction has that id
        """
        pass

    @abstractmethod
    def get(self, transaction_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by id, or None."""
        pass

    @abstractmethod
    def list_all(self) -> list[Transaction]:
        """
        Snapshot of all transactions in insertion order.

        The returned list is a copy; mutating it does not touch the store.
        """
        pass

    def __len__(self) -> int:
        return len(self.list_all())


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
