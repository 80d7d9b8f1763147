"""
In-Memory Transaction Storage

Keeps transactions in a dict keyed by id. Python dicts preserve insertion
order, so listing returns transactions in the order they were entered and
a full-replacement edit keeps the original position.
"""

from typing import Iterable, Optional

import structlog

from household_ledger.models.budget import Transaction
from household_ledger.services.storage.interface import (
    DuplicateError,
    NotFoundError,
    TransactionStorageInterface,
)


logger = structlog.get_logger(__name__)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """Transaction store backed by a plain dict."""

    def __init__(self, transactions: Optional[Iterable[Transaction]] = None):
        self._transactions: dict[str, Transaction] = {}
        for txn in transactions or ():
            self.add(txn)

    def add(self, transaction: Transaction) -> Transaction:
        if transaction.id in self._transactions:
            raise DuplicateError(f"Transaction {transaction.id} already exists")
        self._transactions[transaction.id] = transaction
        logger.debug("transaction_stored", transaction_id=transaction.id)
        return transaction

    def replace(self, transaction: Transaction) -> Transaction:
        previous = self._transactions.get(transaction.id)
        if previous is None:
            raise NotFoundError(f"Transaction {transaction.id} not found")
        self._transactions[transaction.id] = transaction
        logger.debug("transaction_replaced", transaction_id=transaction.id)
        return previous

    def delete(self, transaction_id: str) -> Transaction:
        try:
            removed = self._transactions.pop(transaction_id)
        except KeyError:
            raise NotFoundError(f"Transaction {transaction_id} not found") from None
        logger.debug("transaction_removed", transaction_id=transaction_id)
        return removed

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def list_all(self) -> list[Transaction]:
        return list(self._transactions.values())

    def __len__(self) -> int:
        return len(self._transactions)
