"""Field-level validation of transaction drafts."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from shared.categories import categories_for
from shared.models import TransactionType


_VALID_TYPES = {transaction_type.value for transaction_type in TransactionType}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_amount(value: Any) -> Decimal | None:
    """Return `value` as a finite Decimal, or None when it is not numeric."""
    if isinstance(value, bool) or _is_blank(value):
        return None
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite():
        return None
    return amount


def _raw_type(value: Any) -> str | None:
    raw = getattr(value, "value", value)
    if isinstance(raw, str) and raw in _VALID_TYPES:
        return raw
    return None


def validate_transaction(draft: Mapping[str, Any]) -> dict[str, str]:
    """Return field -> message for every failing rule; empty means valid."""

    errors: dict[str, str] = {}

    if _is_blank(draft.get("title")):
        errors["title"] = "Title is required"

    if _is_blank(draft.get("description")):
        errors["description"] = "Description is required"

    raw_amount = draft.get("amount")
    if _is_blank(raw_amount):
        errors["amount"] = "Amount is required"
    else:
        amount = parse_amount(raw_amount)
        if amount is None:
            errors["amount"] = "Amount must be a number"
        elif amount <= 0:
            errors["amount"] = "Amount must be greater than 0"

    raw_type = draft.get("type")
    transaction_type = _raw_type(raw_type)
    if _is_blank(raw_type):
        errors["type"] = "Transaction type is required"
    elif transaction_type is None:
        errors["type"] = "Transaction type must be income or expense"

    category = draft.get("category")
    if _is_blank(category):
        errors["category"] = "Category is required"
    elif transaction_type is not None and category not in categories_for(transaction_type):
        errors["category"] = f"Invalid category for {transaction_type} transaction"

    if _is_blank(draft.get("date")):
        errors["date"] = "Date is required"

    return errors
