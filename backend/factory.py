"""Composition root for backend services."""

from __future__ import annotations

import logging
from datetime import timedelta

from backend.db.storage_client import InMemoryStorage, JsonFileStorage, KeyValueStorage, StorageSettings
from backend.repositories.sample_transactions import sample_transactions
from backend.repositories.transactions_repository import StorageTransactionsRepository
from backend.services.auth_service import AuthService
from backend.services.transaction_service import TransactionService
from shared import config


logger = logging.getLogger(__name__)


def build_storage() -> KeyValueStorage:
    """Build the storage collaborator from environment configuration.

    File-backed storage is used when `FINANCE_STORAGE_DIR` is set; otherwise
    data only lives for the current process.
    """

    directory = config.storage_dir()
    if directory:
        logger.info("storage_backend=json_file directory=%s", directory)
        return JsonFileStorage(
            StorageSettings(
                directory=directory,
                prefix=config.storage_prefix(),
                max_bytes=config.storage_max_bytes(),
            )
        )

    logger.info("storage_backend=in_memory")
    return InMemoryStorage()


def build_transaction_service(storage: KeyValueStorage | None = None) -> TransactionService:
    repository = StorageTransactionsRepository(
        storage if storage is not None else build_storage(),
        seed_factory=sample_transactions if config.seed_demo_data() else None,
    )
    return TransactionService(repository=repository, default_page_size=config.default_page_size())


def build_auth_service(storage: KeyValueStorage | None = None) -> AuthService:
    return AuthService(
        storage if storage is not None else build_storage(),
        username=config.auth_username(),
        password=config.auth_password(),
        session_ttl=timedelta(hours=config.session_ttl_hours()),
    )
