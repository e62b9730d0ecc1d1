"""DTOs for aggregate transaction statistics.

Amounts are plain ``Decimal`` sums: a summary may legitimately total zero,
which ``Money`` would reject.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from txaggregator.domain.transactions import Category, YearMonth


@dataclass(frozen=True)
class CategorySummary:
    category: Category
    total_amount: Decimal
    transaction_count: int


@dataclass(frozen=True)
class CategoryStatistics:
    """Per-category totals for one month, sorted by category name."""

    month: YearMonth
    categories: tuple[CategorySummary, ...] = ()

    @classmethod
    def empty(cls, month: YearMonth) -> CategoryStatistics:
        return cls(month=month)


@dataclass(frozen=True)
class IbanSummary:
    iban: str
    total_income: Decimal
    total_expense: Decimal
    balance: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if self.balance is None:
            object.__setattr__(self, "balance", self.total_income + self.total_expense)


@dataclass(frozen=True)
class IbanStatistics:
    """Per-IBAN income, expense and balance for one month, sorted by IBAN."""

    month: YearMonth
    ibans: tuple[IbanSummary, ...] = ()

    @classmethod
    def empty(cls, month: YearMonth) -> IbanStatistics:
        return cls(month=month)


@dataclass(frozen=True)
class MonthlySummary:
    month: YearMonth
    total_income: Decimal
    total_expense: Decimal
    balance: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if self.balance is None:
            object.__setattr__(self, "balance", self.total_income + self.total_expense)


@dataclass(frozen=True)
class MonthlyStatistics:
    """Per-month income, expense and balance for one year, chronological."""

    year: int
    months: tuple[MonthlySummary, ...] = ()

    @classmethod
    def empty(cls, year: int) -> MonthlyStatistics:
        return cls(year=year)
