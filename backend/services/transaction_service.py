"""Transaction store contract exposed to the UI layer.

Every operation returns a value or a :class:`ToolError`; repository exceptions
are converted here and never reach the caller.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import ValidationError

from backend.reporting.dashboard import build_dashboard
from backend.repositories.transactions_repository import (
    TransactionNotFoundError,
    TransactionPersistenceError,
    TransactionsRepository,
)
from backend.services.query import run_query, sort_transactions
from backend.services.validation import parse_amount, validate_transaction
from shared.config import DEFAULT_PAGE_SIZE
from shared.models import (
    BulkDeleteResult,
    DashboardData,
    ExportResult,
    ImportResult,
    ImportRowError,
    SortDirection,
    SortField,
    ToolError,
    ToolErrorCode,
    Transaction,
    TransactionEvent,
    TransactionPage,
    TransactionQuery,
)


logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "amount", "type", "category", "date")
EXPORT_FORMATS = ("json", "csv")
CSV_HEADERS = ("Date", "Title", "Description", "Type", "Category", "Amount")

TransactionListener = Callable[[TransactionEvent], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid4())


def _editable_fields(source: Mapping[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for name in EDITABLE_FIELDS:
        if name not in source:
            continue
        value = source[name]
        if name in ("title", "description") and isinstance(value, str):
            value = value.strip()
        elif name == "amount":
            value = parse_amount(value)
        fields[name] = value
    return fields


def _field_errors_from_validation(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        location = error.get("loc") or ()
        field_name = str(location[0]) if location else "category"
        message = str(error.get("msg", "Invalid value"))
        if field_name == "date":
            message = "Date must be a valid date (YYYY-MM-DD)"
        elif message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        errors.setdefault(field_name, message)
    return errors


def _validation_error(errors: dict[str, str]) -> ToolError:
    return ToolError(
        code=ToolErrorCode.VALIDATION_ERROR,
        message="Please check your input and try again.",
        details=dict(errors),
    )


def _not_found(transaction_id: str) -> ToolError:
    return ToolError(
        code=ToolErrorCode.NOT_FOUND,
        message="Transaction not found",
        details={"id": transaction_id},
    )


def _persistence_error(exc: TransactionPersistenceError) -> ToolError:
    return ToolError(code=ToolErrorCode.PERSISTENCE_ERROR, message=str(exc))


def _backend_error(operation: str, exc: Exception) -> ToolError:
    logger.exception("transaction_operation_failed operation=%s", operation)
    return ToolError(
        code=ToolErrorCode.BACKEND_ERROR,
        message=f"Failed to {operation} transaction data",
        details={"exception_type": type(exc).__name__},
    )


@dataclass(slots=True)
class TransactionService:
    repository: TransactionsRepository
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _new_id
    default_page_size: int = DEFAULT_PAGE_SIZE
    _listeners: list[TransactionListener] = field(default_factory=list)

    def subscribe(self, listener: TransactionListener) -> Callable[[], None]:
        """Register a listener called after each successful mutation."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, action: str, transaction_ids: Iterable[str]) -> None:
        event = TransactionEvent(action=action, transaction_ids=list(transaction_ids))
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("transaction_listener_failed action=%s", action)

    def _build(self, draft: Mapping[str, Any], **system_fields: Any) -> Transaction | ToolError:
        errors = validate_transaction(draft)
        if errors:
            return _validation_error(errors)
        try:
            return Transaction.model_validate({**_editable_fields(draft), **system_fields})
        except ValidationError as exc:
            return _validation_error(_field_errors_from_validation(exc))

    def get_all(self) -> list[Transaction]:
        return self.repository.list_transactions()

    def get_by_id(self, transaction_id: str) -> Transaction | ToolError:
        try:
            return self.repository.get_transaction(transaction_id)
        except TransactionNotFoundError:
            return _not_found(transaction_id)

    def create(self, draft: Mapping[str, Any]) -> Transaction | ToolError:
        transaction = self._build(draft, id=self.id_factory(), created_at=self.clock())
        if isinstance(transaction, ToolError):
            logger.info("transaction_create_rejected fields=%s", sorted(transaction.details))
            return transaction

        try:
            self.repository.add_transactions([transaction])
        except TransactionPersistenceError as exc:
            return _persistence_error(exc)
        except Exception as exc:
            return _backend_error("create", exc)

        logger.info("transaction_created id=%s type=%s", transaction.id, transaction.type.value)
        self._emit("create", [transaction.id])
        return transaction

    def update(self, transaction_id: str, changes: Mapping[str, Any]) -> Transaction | ToolError:
        try:
            existing = self.repository.get_transaction(transaction_id)
        except TransactionNotFoundError:
            return _not_found(transaction_id)

        merged = {
            **existing.model_dump(include=set(EDITABLE_FIELDS)),
            **{name: changes[name] for name in EDITABLE_FIELDS if name in changes},
        }
        updated = self._build(
            merged,
            id=existing.id,
            created_at=existing.created_at,
            updated_at=self.clock(),
        )
        if isinstance(updated, ToolError):
            logger.info("transaction_update_rejected id=%s fields=%s", transaction_id, sorted(updated.details))
            return updated

        try:
            self.repository.replace_transaction(updated)
        except TransactionNotFoundError:
            return _not_found(transaction_id)
        except TransactionPersistenceError as exc:
            return _persistence_error(exc)
        except Exception as exc:
            return _backend_error("update", exc)

        logger.info("transaction_updated id=%s", transaction_id)
        self._emit("update", [transaction_id])
        return updated

    def delete(self, transaction_id: str) -> None | ToolError:
        try:
            removed = self.repository.remove_transactions([transaction_id])
        except TransactionPersistenceError as exc:
            return _persistence_error(exc)
        except Exception as exc:
            return _backend_error("delete", exc)

        if not removed:
            return _not_found(transaction_id)

        logger.info("transaction_deleted id=%s", transaction_id)
        self._emit("delete", removed)
        return None

    def bulk_delete(self, transaction_ids: Iterable[str]) -> BulkDeleteResult | ToolError:
        try:
            removed = self.repository.remove_transactions(transaction_ids)
        except TransactionPersistenceError as exc:
            return _persistence_error(exc)
        except Exception as exc:
            return _backend_error("delete", exc)

        logger.info("transactions_bulk_deleted count=%s", len(removed))
        if removed:
            self._emit("bulk_delete", removed)
        return BulkDeleteResult(deleted_count=len(removed))

    def duplicate(self, transaction_id: str, today: date | None = None) -> Transaction | ToolError:
        source = self.get_by_id(transaction_id)
        if isinstance(source, ToolError):
            return source

        draft = source.model_dump(include=set(EDITABLE_FIELDS))
        draft["title"] = f"{source.title} (Copy)"
        draft["date"] = today or self.clock().date()
        return self.create(draft)

    def import_transactions(self, items: Any) -> ImportResult | ToolError:
        if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message="Invalid import data format",
            )

        accepted: list[Transaction] = []
        row_errors: list[ImportRowError] = []
        for index, item in enumerate(items, start=1):
            if not isinstance(item, Mapping):
                row_errors.append(ImportRowError(index=index, errors={"item": "Expected an object"}))
                continue
            transaction = self._build(item, id=self.id_factory(), created_at=self.clock())
            if isinstance(transaction, ToolError):
                row_errors.append(ImportRowError(index=index, errors=dict(transaction.details)))
                continue
            accepted.append(transaction)

        if accepted:
            try:
                self.repository.add_transactions(accepted)
            except TransactionPersistenceError as exc:
                return _persistence_error(exc)
            except Exception as exc:
                return _backend_error("import", exc)
            self._emit("import", [transaction.id for transaction in accepted])

        logger.info("transactions_imported imported=%s failed=%s", len(accepted), len(row_errors))
        return ImportResult(imported=len(accepted), failed=len(row_errors), errors=row_errors)

    def export_transactions(self, export_format: str = "json", today: date | None = None) -> ExportResult | ToolError:
        normalized = export_format.strip().lower()
        if normalized not in EXPORT_FORMATS:
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message=f"Unsupported export format: {export_format}",
                details={"format": export_format},
            )

        transactions = sort_transactions(self.get_all(), SortField.DATE, SortDirection.DESC)
        filename = f"transactions-{(today or self.clock().date()).isoformat()}.{normalized}"

        if normalized == "csv":
            buffer = io.StringIO()
            writer = csv.writer(buffer, lineterminator="\n")
            writer.writerow(CSV_HEADERS)
            for transaction in transactions:
                writer.writerow(
                    [
                        transaction.date.isoformat(),
                        transaction.title,
                        transaction.description,
                        transaction.type.value,
                        transaction.category,
                        str(transaction.amount),
                    ]
                )
            content = buffer.getvalue()
        else:
            content = json.dumps(
                [transaction.model_dump(mode="json") for transaction in transactions],
                ensure_ascii=False,
                indent=2,
            )

        return ExportResult(format=normalized, filename=filename, content=content)

    def reset(self) -> None | ToolError:
        try:
            self.repository.reset()
        except TransactionPersistenceError as exc:
            return _persistence_error(exc)
        except Exception as exc:
            return _backend_error("reset", exc)

        logger.info("transactions_reset")
        self._emit("reset", [])
        return None

    def list_page(
        self,
        query: TransactionQuery | Mapping[str, Any] | None = None,
        reference_date: date | None = None,
    ) -> TransactionPage | ToolError:
        """Run the query pipeline over the current snapshot."""

        try:
            if query is None:
                query = TransactionQuery(page_size=self.default_page_size)
            elif not isinstance(query, TransactionQuery):
                query = TransactionQuery.model_validate({"page_size": self.default_page_size, **query})
        except ValidationError as exc:
            return ToolError(
                code=ToolErrorCode.VALIDATION_ERROR,
                message="Invalid transaction query",
                details=_field_errors_from_validation(exc),
            )
        return run_query(self.get_all(), query, reference_date)

    def dashboard(self, reference_date: date | None = None) -> DashboardData:
        return build_dashboard(self.get_all(), reference_date or self.clock().date())
