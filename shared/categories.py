"""Fixed category sets per transaction type."""

from __future__ import annotations

from typing import Any


CATEGORY_SET: dict[str, tuple[str, ...]] = {
    "income": ("Salary", "Freelance", "Investment", "Bonus", "Gift", "Other"),
    "expense": (
        "Food",
        "Transportation",
        "Shopping",
        "Utilities",
        "Healthcare",
        "Entertainment",
        "Education",
        "Other",
    ),
}


def _type_key(transaction_type: Any) -> str:
    # str-based enums hash by member name, so look up by their raw value.
    return str(getattr(transaction_type, "value", transaction_type))


def categories_for(transaction_type: Any) -> tuple[str, ...]:
    """Return allowed categories for a transaction type (empty when unknown)."""
    return CATEGORY_SET.get(_type_key(transaction_type), ())


def is_valid_category(transaction_type: Any, category: str | None) -> bool:
    """Return whether `category` belongs to the set of `transaction_type`."""
    if not category:
        return False
    return category in categories_for(transaction_type)
