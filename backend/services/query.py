"""Search, filter, sort and pagination over transaction snapshots.

Every function returns a new list and leaves its input untouched, so the same
snapshot can feed several views.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import date, timedelta
from typing import Any

from shared.models import (
    Period,
    SortDirection,
    SortField,
    Transaction,
    TransactionPage,
    TransactionQuery,
    TransactionType,
)


MAX_VISIBLE_PAGES = 5


def search(transactions: Sequence[Transaction], term: str | None) -> list[Transaction]:
    """Case-insensitive substring match on title, description and category."""
    if term is None or not term.strip():
        return list(transactions)

    needle = term.casefold()
    return [
        transaction
        for transaction in transactions
        if needle in transaction.title.casefold()
        or needle in transaction.description.casefold()
        or needle in transaction.category.casefold()
    ]


def filter_by_type(
    transactions: Sequence[Transaction], transaction_type: TransactionType | str | None
) -> list[Transaction]:
    if not transaction_type:
        return list(transactions)
    wanted = TransactionType(transaction_type)
    return [transaction for transaction in transactions if transaction.type == wanted]


def filter_by_category(transactions: Sequence[Transaction], category: str | None) -> list[Transaction]:
    if not category:
        return list(transactions)
    return [transaction for transaction in transactions if transaction.category == category]


def period_start(period: Period | str, reference_date: date | None = None) -> date | None:
    """Return the inclusive lower bound of `period`, or None for `all`."""
    reference = reference_date or date.today()
    resolved = Period(period)

    if resolved == Period.TODAY:
        return reference
    if resolved == Period.WEEK:
        # Weeks start on Sunday; date.weekday() counts Monday as 0.
        return reference - timedelta(days=(reference.weekday() + 1) % 7)
    if resolved == Period.MONTH:
        return reference.replace(day=1)
    if resolved == Period.YEAR:
        return reference.replace(month=1, day=1)
    return None


def filter_by_period(
    transactions: Sequence[Transaction],
    period: Period | str | None,
    reference_date: date | None = None,
) -> list[Transaction]:
    """Keep transactions dated on or after the start of `period`."""
    if not period:
        return list(transactions)
    start = period_start(period, reference_date)
    if start is None:
        return list(transactions)
    return [transaction for transaction in transactions if transaction.date >= start]


def _sort_key(field: SortField):
    if field in (SortField.AMOUNT, SortField.DATE, SortField.CREATED_AT):
        return lambda transaction: getattr(transaction, field.value)
    if field == SortField.TYPE:
        return lambda transaction: transaction.type.value
    return lambda transaction: getattr(transaction, field.value).casefold()


def sort_transactions(
    transactions: Sequence[Transaction],
    field: SortField | str = SortField.DATE,
    direction: SortDirection | str = SortDirection.DESC,
) -> list[Transaction]:
    """Stable sort; ties keep their input order in both directions."""
    resolved_field = SortField(field)
    reverse = SortDirection(direction) == SortDirection.DESC
    return sorted(transactions, key=_sort_key(resolved_field), reverse=reverse)


def total_pages_for(total_items: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    return math.ceil(total_items / page_size)


def clamp_page(page: int, total_pages: int) -> int:
    """Return `page`, or 1 when it falls outside 1..total_pages."""
    if page < 1 or page > max(total_pages, 1):
        return 1
    return page


def paginate(transactions: Sequence[Transaction], page: int, page_size: int) -> TransactionPage:
    """Return the 1-indexed window `[(page-1)*page_size, page*page_size)`.

    No clamping happens here: a page past the end is returned empty. Use
    :func:`clamp_page` or :func:`run_query` for the reset-to-first-page policy.
    """
    if page < 1:
        raise ValueError("page must be >= 1")

    total_items = len(transactions)
    total_pages = total_pages_for(total_items, page_size)
    offset = (page - 1) * page_size
    items = list(transactions[offset : offset + page_size])

    if items:
        start_index = offset + 1
        end_index = min(offset + page_size, total_items)
    else:
        start_index = 0
        end_index = 0

    return TransactionPage(
        items=items,
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
        start_index=start_index,
        end_index=end_index,
    )


def page_numbers(current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES) -> list[int]:
    """Return the window of page links centred on `current_page`."""
    if total_pages <= max_visible:
        return list(range(1, total_pages + 1))

    start_page = max(1, current_page - max_visible // 2)
    end_page = min(total_pages, start_page + max_visible - 1)
    return list(range(start_page, end_page + 1))


def apply_filters(
    transactions: Sequence[Transaction],
    query: TransactionQuery,
    reference_date: date | None = None,
) -> list[Transaction]:
    """Run search and filters, then sort; no pagination."""
    result = search(transactions, query.search)
    result = filter_by_type(result, query.type)
    result = filter_by_category(result, query.category)
    result = filter_by_period(result, query.period, reference_date)
    return sort_transactions(result, query.sort_field, query.sort_direction)


def run_query(
    transactions: Sequence[Transaction],
    query: TransactionQuery | dict[str, Any] | None = None,
    reference_date: date | None = None,
) -> TransactionPage:
    """Compose search -> type -> category -> period -> sort -> paginate.

    A requested page beyond the filtered result resets to page 1.
    """
    if query is None:
        query = TransactionQuery()
    elif not isinstance(query, TransactionQuery):
        query = TransactionQuery.model_validate(query)

    ordered = apply_filters(transactions, query, reference_date)
    total_pages = total_pages_for(len(ordered), query.page_size)
    return paginate(ordered, clamp_page(query.page, total_pages), query.page_size)
