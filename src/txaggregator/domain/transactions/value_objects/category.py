"""Closed set of transaction categories used for budget classification."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError


class Category(Enum):
    """Transaction category."""

    FOOD = "FOOD"
    TRANSPORT = "TRANSPORT"
    UTILITIES = "UTILITIES"
    ENTERTAINMENT = "ENTERTAINMENT"
    HEALTHCARE = "HEALTHCARE"
    SHOPPING = "SHOPPING"
    SALARY = "SALARY"
    TRANSFER = "TRANSFER"
    OTHER = "OTHER"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_string(cls, value: str | None) -> Optional[Category]:
        """Look up a category case-insensitively; unknown text yields None."""
        if value is None or not value.strip():
            return None
        return _BY_NAME.get(value.strip().lower())

    @classmethod
    def from_string_or_raise(cls, value: str | None) -> Category:
        category = cls.from_string(value)
        if category is None:
            raise ValidationError(
                f"Unknown category: {value}",
                code=ErrorCode.INVALID_CATEGORY,
                details={"category": value},
            )
        return category


_DISPLAY_NAMES: Mapping[Category, str] = MappingProxyType(
    {
        Category.FOOD: "Food & Groceries",
        Category.TRANSPORT: "Transportation",
        Category.UTILITIES: "Bills & Utilities",
        Category.ENTERTAINMENT: "Entertainment",
        Category.HEALTHCARE: "Healthcare",
        Category.SHOPPING: "Shopping",
        Category.SALARY: "Salary & Income",
        Category.TRANSFER: "Bank Transfer",
        Category.OTHER: "Other",
    },
)

_BY_NAME: Mapping[str, Category] = MappingProxyType(
    {category.name.lower(): category for category in Category},
)
