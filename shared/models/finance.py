"""Core shared schemas for transaction store, query and reporting contracts."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from shared.categories import is_valid_category
from shared.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class Period(str, Enum):
    """Named relative date ranges used by filters and reports."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class SortField(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    TITLE = "title"
    DESCRIPTION = "description"
    CATEGORY = "category"
    TYPE = "type"
    CREATED_AT = "created_at"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class ToolErrorCode(str, Enum):
    """Stable error codes returned by service contracts."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    BACKEND_ERROR = "BACKEND_ERROR"


class ToolError(BaseModel):
    """Standardized error payload returned instead of raising."""

    model_config = ConfigDict(extra="forbid")

    code: ToolErrorCode
    message: str
    details: dict[str, object] = Field(default_factory=dict)


class Transaction(BaseModel):
    """A single income or expense record."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    type: TransactionType
    category: str
    date: date
    created_at: datetime
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def check_category_matches_type(self) -> "Transaction":
        if not is_valid_category(self.type, self.category):
            raise ValueError(f"Invalid category for {self.type.value} transaction")
        return self


class TransactionEvent(BaseModel):
    """Notification emitted after a successful store mutation."""

    model_config = ConfigDict(extra="forbid")

    action: str
    transaction_ids: list[str] = Field(default_factory=list)


class TransactionSummary(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    count: int = 0


class CategoryStat(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    count: int = 0


class CategoryAmount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    category: str
    amount: Decimal


class MonthlyStat(BaseModel):
    model_config = ConfigDict(extra="forbid")

    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    count: int = 0


class TrendComponent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current: Decimal
    previous: Decimal
    change_percent: float
    direction: TrendDirection


class TrendResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    income: TrendComponent
    expense: TrendComponent


class TransactionQuery(BaseModel):
    """Parameters of the search/filter/sort/paginate pipeline."""

    model_config = ConfigDict(extra="forbid")

    search: str = ""
    type: TransactionType | None = None
    category: str | None = None
    period: Period = Period.ALL
    sort_field: SortField = SortField.DATE
    sort_direction: SortDirection = SortDirection.DESC
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)


class TransactionPage(BaseModel):
    """One page of a derived transaction view."""

    model_config = ConfigDict(extra="forbid")

    items: list[Transaction]
    page: int
    page_size: int
    total_items: int
    total_pages: int
    has_next: bool
    has_prev: bool
    start_index: int
    end_index: int


class BulkDeleteResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    deleted_count: int


class ImportRowError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: int
    errors: dict[str, str]


class ImportResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    imported: int
    failed: int
    errors: list[ImportRowError] = Field(default_factory=list)


class ExportResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    format: str
    filename: str
    content: str


class TransactionReport(BaseModel):
    """Period report: summary, category statistics and largest transactions."""

    model_config = ConfigDict(extra="forbid")

    period: Period
    summary: TransactionSummary
    category_stats: list[CategoryStat]
    top_transactions: list[Transaction]
    transactions: list[Transaction]


class DashboardData(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reference_date: date
    summary: TransactionSummary
    current_month: TransactionSummary
    month_trend: TrendResult
    recent_transactions: list[Transaction]
    top_expense_categories: list[CategoryAmount]
    monthly_breakdown: dict[str, MonthlyStat]
