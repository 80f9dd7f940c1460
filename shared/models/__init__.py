"""Pydantic models shared across backend layers."""

from .auth import AuthSession, AuthUser
from .finance import (
    BulkDeleteResult,
    CategoryAmount,
    CategoryStat,
    DashboardData,
    ExportResult,
    ImportResult,
    ImportRowError,
    MonthlyStat,
    Period,
    SortDirection,
    SortField,
    ToolError,
    ToolErrorCode,
    Transaction,
    TransactionEvent,
    TransactionPage,
    TransactionQuery,
    TransactionReport,
    TransactionSummary,
    TransactionType,
    TrendComponent,
    TrendDirection,
    TrendResult,
)

__all__ = [
    "AuthSession",
    "AuthUser",
    "BulkDeleteResult",
    "CategoryAmount",
    "CategoryStat",
    "DashboardData",
    "ExportResult",
    "ImportResult",
    "ImportRowError",
    "MonthlyStat",
    "Period",
    "SortDirection",
    "SortField",
    "ToolError",
    "ToolErrorCode",
    "Transaction",
    "TransactionEvent",
    "TransactionPage",
    "TransactionQuery",
    "TransactionReport",
    "TransactionSummary",
    "TransactionType",
    "TrendComponent",
    "TrendDirection",
    "TrendResult",
]
