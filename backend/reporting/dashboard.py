"""Assemble the dashboard view from a transaction snapshot."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from backend.reporting.aggregation import (
    month_over_month_trend,
    monthly_breakdown,
    period_summary,
    recent_transactions,
    summary,
    top_categories,
)
from shared.models import DashboardData, Transaction, TransactionType


RECENT_LIMIT = 5
TOP_CATEGORIES_LIMIT = 5


def build_dashboard(
    transactions: Sequence[Transaction],
    reference_date: date | None = None,
    *,
    recent_limit: int = RECENT_LIMIT,
    top_categories_limit: int = TOP_CATEGORIES_LIMIT,
) -> DashboardData:
    reference = reference_date or date.today()
    return DashboardData(
        reference_date=reference,
        summary=summary(transactions),
        current_month=period_summary(transactions, reference),
        month_trend=month_over_month_trend(transactions, reference),
        recent_transactions=recent_transactions(transactions, recent_limit),
        top_expense_categories=top_categories(
            transactions, TransactionType.EXPENSE, top_categories_limit
        ),
        monthly_breakdown=monthly_breakdown(transactions),
    )
