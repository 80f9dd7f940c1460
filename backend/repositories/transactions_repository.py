"""Transactions repository adapters.

The repository owns the canonical in-memory collection. The storage
collaborator is a passive mirror: every mutation re-serializes the whole
collection under a single key.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Protocol

from pydantic import ValidationError

from backend.db.storage_client import (
    CorruptPayloadError,
    KeyValueStorage,
    StorageError,
    StorageQuotaExceededError,
)
from backend.repositories.sample_transactions import sample_transactions
from shared.models import Transaction


logger = logging.getLogger(__name__)

TRANSACTIONS_STORAGE_KEY = "transactions"


class TransactionNotFoundError(LookupError):
    """Raised when an id is absent from the collection."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class TransactionPersistenceError(RuntimeError):
    """Raised when the storage collaborator rejected a write twice."""


class TransactionsRepository(Protocol):
    def list_transactions(self) -> list[Transaction]:
        """Return a snapshot of the collection in store order."""

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Return one transaction or raise TransactionNotFoundError."""

    def add_transactions(self, transactions: list[Transaction]) -> None:
        """Prepend transactions to the collection and persist."""

    def replace_transaction(self, transaction: Transaction) -> None:
        """Replace the record sharing `transaction.id` and persist."""

    def remove_transactions(self, transaction_ids: Iterable[str]) -> list[str]:
        """Remove matching records, persist, and return removed ids."""

    def reset(self) -> None:
        """Clear persisted data and reseed the collection."""


class StorageTransactionsRepository:
    """Repository mirrored to a key-value storage collaborator."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        storage_key: str = TRANSACTIONS_STORAGE_KEY,
        seed_factory: Callable[[], list[Transaction]] | None = sample_transactions,
    ) -> None:
        self._storage = storage
        self._storage_key = storage_key
        self._seed_factory = seed_factory
        self._transactions: list[Transaction] | None = None

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def _seed(self) -> list[Transaction]:
        return list(self._seed_factory()) if self._seed_factory is not None else []

    @staticmethod
    def _parse_rows(raw_rows: Any) -> list[Transaction]:
        if not isinstance(raw_rows, list):
            raise ValueError(f"Expected a list of transactions, got {type(raw_rows).__name__}")
        return [Transaction.model_validate(row) for row in raw_rows]

    def _load_persisted(self) -> list[Transaction] | None:
        try:
            raw_rows = self._storage.load(self._storage_key)
        except CorruptPayloadError:
            logger.warning("transactions_payload_corrupt key=%s; reseeding", self._storage_key)
            return None
        except StorageError:
            logger.exception("transactions_load_failed key=%s; reseeding", self._storage_key)
            return None
        except Exception:
            logger.exception("transactions_load_unexpected_error key=%s; reseeding", self._storage_key)
            return None

        if raw_rows is None:
            return None

        try:
            return self._parse_rows(raw_rows)
        except (ValidationError, ValueError) as exc:
            logger.warning(
                "transactions_payload_malformed key=%s error=%s; reseeding",
                self._storage_key,
                exc,
            )
            return None

    def _ensure_loaded(self) -> list[Transaction]:
        if self._transactions is not None:
            return self._transactions

        persisted = self._load_persisted()
        if persisted:
            self._transactions = persisted
            logger.info("transactions_loaded key=%s count=%s", self._storage_key, len(persisted))
            return self._transactions

        seeded = self._seed()
        self._transactions = seeded
        logger.info("transactions_seeded key=%s count=%s", self._storage_key, len(seeded))
        try:
            self._persist(seeded)
        except TransactionPersistenceError:
            logger.warning("transactions_seed_not_persisted key=%s", self._storage_key)
        return self._transactions

    def _persist(self, transactions: list[Transaction]) -> None:
        payload = [transaction.model_dump(mode="json") for transaction in transactions]
        last_error: StorageError | None = None
        for attempt in (1, 2):
            try:
                self._storage.save(self._storage_key, payload)
                return
            except StorageError as exc:
                if isinstance(exc, StorageQuotaExceededError):
                    logger.warning("transactions_save_over_quota key=%s error=%s", self._storage_key, exc)
                    last_error = exc
                    break
                logger.warning(
                    "transactions_save_failed key=%s attempt=%s error=%s",
                    self._storage_key,
                    attempt,
                    exc,
                )
                last_error = exc
        raise TransactionPersistenceError(
            f"Could not persist transactions under key '{self._storage_key}': {last_error}"
        ) from last_error

    def _commit(self, transactions: list[Transaction]) -> None:
        # The in-memory collection only moves forward once storage accepted it.
        self._persist(transactions)
        self._transactions = transactions

    def list_transactions(self) -> list[Transaction]:
        return list(self._ensure_loaded())

    def get_transaction(self, transaction_id: str) -> Transaction:
        for transaction in self._ensure_loaded():
            if transaction.id == transaction_id:
                return transaction
        raise TransactionNotFoundError(transaction_id)

    def add_transactions(self, transactions: list[Transaction]) -> None:
        current = self._ensure_loaded()
        existing_ids = {transaction.id for transaction in current}
        new_ids = [transaction.id for transaction in transactions]
        if len(set(new_ids)) != len(new_ids) or existing_ids.intersection(new_ids):
            raise ValueError("Transaction ids must be unique")
        self._commit([*transactions, *current])

    def replace_transaction(self, transaction: Transaction) -> None:
        current = self._ensure_loaded()
        for index, existing in enumerate(current):
            if existing.id != transaction.id:
                continue
            updated = list(current)
            updated[index] = transaction
            self._commit(updated)
            return
        raise TransactionNotFoundError(transaction.id)

    def remove_transactions(self, transaction_ids: Iterable[str]) -> list[str]:
        targets = set(transaction_ids)
        current = self._ensure_loaded()
        kept = [transaction for transaction in current if transaction.id not in targets]
        removed = [transaction.id for transaction in current if transaction.id in targets]
        if removed:
            self._commit(kept)
        return removed

    def reset(self) -> None:
        try:
            self._storage.clear(self._storage_key)
        except StorageError as exc:
            raise TransactionPersistenceError(
                f"Could not clear transactions under key '{self._storage_key}': {exc}"
            ) from exc
        self._transactions = None
        self._ensure_loaded()
