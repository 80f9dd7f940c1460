"""Reporting utilities: aggregations and dashboard assembly."""

from backend.reporting.aggregation import (
    all_categories,
    build_transaction_report,
    category_breakdown,
    month_over_month_trend,
    monthly_breakdown,
    period_summary,
    recent_transactions,
    summary,
    top_categories,
    top_transactions,
    trend,
)
from backend.reporting.dashboard import build_dashboard

__all__ = [
    "all_categories",
    "build_dashboard",
    "build_transaction_report",
    "category_breakdown",
    "month_over_month_trend",
    "monthly_breakdown",
    "period_summary",
    "recent_transactions",
    "summary",
    "top_categories",
    "top_transactions",
    "trend",
]
