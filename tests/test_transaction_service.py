"""Tests for the transaction store contract."""

from __future__ import annotations

import csv
import io
import json
from datetime import date
from decimal import Decimal

from backend.services.transaction_service import TransactionService
from shared.models import (
    BulkDeleteResult,
    ImportResult,
    ToolError,
    ToolErrorCode,
    Transaction,
    TransactionEvent,
    TransactionPage,
)
from tests.fakes import FIXED_NOW, FlakyStorage, build_service, make_transaction, valid_draft


def test_create_then_get_round_trip() -> None:
    service = build_service()

    created = service.create(valid_draft(title="  Grocery run  "))

    assert isinstance(created, Transaction)
    assert created.id == "id-1"
    assert created.title == "Grocery run"
    assert created.amount == Decimal("125000")
    assert created.date == date(2024, 3, 12)
    assert created.created_at == FIXED_NOW
    assert created.updated_at is None
    assert service.get_by_id("id-1") == created
    assert service.get_all()[0] == created


def test_reads_are_idempotent() -> None:
    service = build_service([make_transaction("a"), make_transaction("b")])

    assert service.get_all() == service.get_all()
    assert service.get_by_id("a") == service.get_by_id("a")


def test_invalid_create_leaves_collection_unchanged() -> None:
    service = build_service([make_transaction("a")])
    events: list[TransactionEvent] = []
    service.subscribe(events.append)

    result = service.create(valid_draft(amount="0", title=""))

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.VALIDATION_ERROR
    assert result.details == {
        "amount": "Amount must be greater than 0",
        "title": "Title is required",
    }
    assert [t.id for t in service.get_all()] == ["a"]
    assert events == []


def test_income_with_expense_category_is_rejected_on_category() -> None:
    service = build_service()

    result = service.create(valid_draft(type="income", category="Food"))

    assert isinstance(result, ToolError)
    assert result.details == {"category": "Invalid category for income transaction"}


def test_unparseable_date_is_a_validation_error() -> None:
    service = build_service()

    result = service.create(valid_draft(date="2024-13-45"))

    assert isinstance(result, ToolError)
    assert result.details == {"date": "Date must be a valid date (YYYY-MM-DD)"}


def test_get_by_unknown_id_is_not_found() -> None:
    service = build_service()

    result = service.get_by_id("missing")

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.NOT_FOUND
    assert result.details == {"id": "missing"}


def test_update_merges_changes_and_stamps_updated_at() -> None:
    original = make_transaction("a", title="Lunch", amount="50000")
    service = build_service([original])

    updated = service.update("a", {"amount": "65000", "id": "hijack", "created_at": "2000-01-01"})

    assert isinstance(updated, Transaction)
    assert updated.id == "a"
    assert updated.title == "Lunch"
    assert updated.amount == Decimal("65000")
    assert updated.created_at == original.created_at
    assert updated.updated_at == FIXED_NOW
    assert service.get_by_id("a") == updated


def test_update_validates_merged_record() -> None:
    service = build_service([make_transaction("a", transaction_type="expense", category="Food")])

    result = service.update("a", {"type": "income"})

    assert isinstance(result, ToolError)
    assert result.details == {"category": "Invalid category for income transaction"}
    assert service.get_by_id("a").type.value == "expense"


def test_update_rejects_non_numeric_amount() -> None:
    service = build_service([make_transaction("a")])

    result = service.update("a", {"amount": "lots"})

    assert isinstance(result, ToolError)
    assert result.details == {"amount": "Amount must be a number"}


def test_update_unknown_id_is_not_found() -> None:
    service = build_service()

    result = service.update("missing", {"title": "x"})

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.NOT_FOUND


def test_delete_removes_and_second_delete_is_not_found() -> None:
    service = build_service([make_transaction("a"), make_transaction("b")])

    assert service.delete("a") is None
    second = service.delete("a")

    assert isinstance(second, ToolError)
    assert second.code == ToolErrorCode.NOT_FOUND
    assert [t.id for t in service.get_all()] == ["b"]


def test_bulk_delete_counts_only_existing_ids() -> None:
    service = build_service([make_transaction("a"), make_transaction("b"), make_transaction("c")])

    result = service.bulk_delete(["a", "c", "nope"])

    assert result == BulkDeleteResult(deleted_count=2)
    assert [t.id for t in service.get_all()] == ["b"]


def test_duplicate_copies_fields_with_new_id_and_date() -> None:
    service = build_service([make_transaction("a", title="Rent", category="Utilities", on=date(2024, 1, 1))])

    copy = service.duplicate("a", today=date(2024, 3, 20))

    assert isinstance(copy, Transaction)
    assert copy.id == "id-1"
    assert copy.title == "Rent (Copy)"
    assert copy.category == "Utilities"
    assert copy.date == date(2024, 3, 20)
    assert [t.id for t in service.get_all()] == ["id-1", "a"]


def test_duplicate_defaults_to_clock_date() -> None:
    service = build_service([make_transaction("a")])

    copy = service.duplicate("a")

    assert isinstance(copy, Transaction)
    assert copy.date == FIXED_NOW.date()


def test_import_keeps_valid_rows_and_reports_failures() -> None:
    service = build_service()

    result = service.import_transactions(
        [
            valid_draft(title="First"),
            valid_draft(amount="-1"),
            "not an object",
            valid_draft(title="Second", type="income", category="Salary"),
        ]
    )

    assert isinstance(result, ImportResult)
    assert (result.imported, result.failed) == (2, 2)
    assert [(error.index, error.errors) for error in result.errors] == [
        (2, {"amount": "Amount must be greater than 0"}),
        (3, {"item": "Expected an object"}),
    ]
    assert [t.title for t in service.get_all()] == ["First", "Second"]


def test_import_rejects_non_list_payload() -> None:
    service = build_service()

    result = service.import_transactions({"title": "x"})

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.VALIDATION_ERROR


def test_export_csv_newest_first_with_header() -> None:
    service = build_service(
        [
            make_transaction("old", title="Old", on=date(2024, 1, 1)),
            make_transaction("new", title="New, with comma", on=date(2024, 3, 1)),
        ]
    )

    result = service.export_transactions("CSV", today=date(2024, 3, 15))

    assert not isinstance(result, ToolError)
    assert result.filename == "transactions-2024-03-15.csv"
    rows = list(csv.reader(io.StringIO(result.content)))
    assert rows[0] == ["Date", "Title", "Description", "Type", "Category", "Amount"]
    assert rows[1][:2] == ["2024-03-01", "New, with comma"]
    assert rows[2][0] == "2024-01-01"


def test_export_json_is_parseable() -> None:
    service = build_service([make_transaction("a")])

    result = service.export_transactions()

    assert not isinstance(result, ToolError)
    assert result.filename == "transactions-2024-03-15.json"
    assert [row["id"] for row in json.loads(result.content)] == ["a"]


def test_export_unknown_format_is_rejected() -> None:
    result = build_service().export_transactions("xml")

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.VALIDATION_ERROR


def test_reset_restores_seed() -> None:
    service = build_service([make_transaction("seed")])
    service.create(valid_draft())

    assert service.reset() is None
    assert [t.id for t in service.get_all()] == ["seed"]


def test_listeners_receive_events_and_failures_are_isolated() -> None:
    service = build_service()
    received: list[TransactionEvent] = []

    def broken(_: TransactionEvent) -> None:
        raise RuntimeError("listener bug")

    service.subscribe(broken)
    unsubscribe = service.subscribe(received.append)

    created = service.create(valid_draft())
    assert isinstance(created, Transaction)
    service.delete(created.id)
    unsubscribe()
    service.create(valid_draft())

    assert [(event.action, event.transaction_ids) for event in received] == [
        ("create", ["id-1"]),
        ("delete", ["id-1"]),
    ]


def test_persistence_failure_is_reported_and_state_kept() -> None:
    storage = FlakyStorage()
    service = build_service([make_transaction("a")], storage=storage)
    service.get_all()
    storage.failures = 2

    result = service.create(valid_draft())

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.PERSISTENCE_ERROR
    assert [t.id for t in service.get_all()] == ["a"]


def test_list_page_runs_query_pipeline() -> None:
    service = build_service(
        [make_transaction(f"t-{index}", on=date(2024, 3, index + 1)) for index in range(12)]
    )

    page = service.list_page({"page": 2, "page_size": 5})

    assert isinstance(page, TransactionPage)
    assert [t.id for t in page.items] == ["t-6", "t-5", "t-4", "t-3", "t-2"]
    assert page.total_pages == 3


def test_list_page_rejects_invalid_query() -> None:
    result = build_service().list_page({"page_size": 0})

    assert isinstance(result, ToolError)
    assert result.code == ToolErrorCode.VALIDATION_ERROR
    assert "page_size" in result.details


def test_dashboard_uses_clock_date_by_default() -> None:
    service = build_service([make_transaction("a", on=date(2024, 3, 1))])

    dashboard = service.dashboard()

    assert dashboard.reference_date == FIXED_NOW.date()
    assert dashboard.current_month.count == 1


def test_service_is_constructible_with_defaults() -> None:
    service = TransactionService(repository=build_service().repository)

    assert service.get_all() == []
