"""Pure aggregations over transaction snapshots."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from backend.services.query import filter_by_period
from shared.models import (
    CategoryAmount,
    CategoryStat,
    MonthlyStat,
    Period,
    Transaction,
    TransactionReport,
    TransactionSummary,
    TransactionType,
    TrendComponent,
    TrendDirection,
    TrendResult,
)


_ZERO = Decimal("0")
REPORT_TOP_LIMIT = 10


def total_by_type(transactions: Sequence[Transaction], transaction_type: TransactionType) -> Decimal:
    return sum(
        (transaction.amount for transaction in transactions if transaction.type == transaction_type),
        _ZERO,
    )


def summary(transactions: Sequence[Transaction]) -> TransactionSummary:
    total_income = total_by_type(transactions, TransactionType.INCOME)
    total_expense = total_by_type(transactions, TransactionType.EXPENSE)
    return TransactionSummary(
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        count=len(transactions),
    )


def in_same_month(value: date, reference_date: date) -> bool:
    return value.year == reference_date.year and value.month == reference_date.month


def period_summary(transactions: Sequence[Transaction], reference_date: date | None = None) -> TransactionSummary:
    """Summarize transactions dated in the calendar month of `reference_date`."""
    reference = reference_date or date.today()
    return summary([transaction for transaction in transactions if in_same_month(transaction.date, reference)])


def category_breakdown(transactions: Sequence[Transaction]) -> list[CategoryStat]:
    """Group by category, largest total first; ties keep first-seen order."""
    groups: dict[str, CategoryStat] = {}
    for transaction in transactions:
        stat = groups.setdefault(transaction.category, CategoryStat(category=transaction.category))
        if transaction.type == TransactionType.INCOME:
            stat.income += transaction.amount
        else:
            stat.expense += transaction.amount
        stat.total += transaction.amount
        stat.count += 1
    return sorted(groups.values(), key=lambda stat: stat.total, reverse=True)


def monthly_breakdown(transactions: Sequence[Transaction]) -> dict[str, MonthlyStat]:
    """Accumulate income/expense/count per `YYYY-MM` key."""
    months: dict[str, MonthlyStat] = {}
    for transaction in transactions:
        key = f"{transaction.date.year:04d}-{transaction.date.month:02d}"
        stat = months.setdefault(key, MonthlyStat())
        if transaction.type == TransactionType.INCOME:
            stat.income += transaction.amount
        else:
            stat.expense += transaction.amount
        stat.count += 1
    return months


def top_transactions(transactions: Sequence[Transaction], n: int = 5) -> list[Transaction]:
    if n <= 0:
        return []
    return sorted(transactions, key=lambda transaction: transaction.amount, reverse=True)[:n]


def recent_transactions(transactions: Sequence[Transaction], n: int = 5) -> list[Transaction]:
    if n <= 0:
        return []
    return sorted(transactions, key=lambda transaction: transaction.date, reverse=True)[:n]


def top_categories(
    transactions: Sequence[Transaction],
    transaction_type: TransactionType = TransactionType.EXPENSE,
    limit: int = 5,
) -> list[CategoryAmount]:
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != transaction_type:
            continue
        totals[transaction.category] = totals.get(transaction.category, _ZERO) + transaction.amount

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryAmount(category=category, amount=amount) for category, amount in ordered[: max(limit, 0)]]


def all_categories(transactions: Sequence[Transaction]) -> list[str]:
    return sorted({transaction.category for transaction in transactions})


def _trend_component(current: Decimal, previous: Decimal) -> TrendComponent:
    if previous == 0:
        change_percent = 0.0
    else:
        change_percent = float((current - previous) / previous * 100)

    if change_percent > 0:
        direction = TrendDirection.UP
    elif change_percent < 0:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.STABLE

    return TrendComponent(
        current=current,
        previous=previous,
        change_percent=change_percent,
        direction=direction,
    )


def trend(current: TransactionSummary, previous: TransactionSummary) -> TrendResult:
    """Compare two period summaries; a zero baseline means no change."""
    return TrendResult(
        income=_trend_component(current.total_income, previous.total_income),
        expense=_trend_component(current.total_expense, previous.total_expense),
    )


def previous_month(reference_date: date) -> date:
    if reference_date.month == 1:
        return date(reference_date.year - 1, 12, 1)
    return date(reference_date.year, reference_date.month - 1, 1)


def month_over_month_trend(
    transactions: Sequence[Transaction], reference_date: date | None = None
) -> TrendResult:
    reference = reference_date or date.today()
    return trend(
        period_summary(transactions, reference),
        period_summary(transactions, previous_month(reference)),
    )


def build_transaction_report(
    transactions: Sequence[Transaction],
    period: Period | str = Period.MONTH,
    reference_date: date | None = None,
) -> TransactionReport:
    filtered = filter_by_period(transactions, period, reference_date)
    return TransactionReport(
        period=Period(period),
        summary=summary(filtered),
        category_stats=category_breakdown(filtered),
        top_transactions=top_transactions(filtered, REPORT_TOP_LIMIT),
        transactions=filtered,
    )
