"""DTOs for transaction queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from txaggregator.domain.transactions import Category, Transaction
from txaggregator.domain.transactions.value_objects import normalize_iban

DEFAULT_PAGE = 0
DEFAULT_SIZE = 20
MAX_SIZE = 100


@dataclass(frozen=True)
class TransactionFilter:
    """Filter and pagination criteria for transaction queries.

    Out-of-range pagination is clamped rather than rejected: ``page`` to at
    least 0, ``size`` into ``[1, 100]``. The IBAN filter is normalized the same
    way stored IBANs are.
    """

    iban: Optional[str] = None
    category: Optional[Category] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "iban", normalize_iban(self.iban) or None)
        object.__setattr__(self, "page", max(self.page, DEFAULT_PAGE))
        object.__setattr__(self, "size", min(max(self.size, 1), MAX_SIZE))

    @classmethod
    def defaults(cls) -> TransactionFilter:
        return cls()

    def with_iban(self, iban: Optional[str]) -> TransactionFilter:
        return replace(self, iban=iban)

    def with_category(self, category: Optional[Category]) -> TransactionFilter:
        return replace(self, category=category)

    def with_date_range(
        self,
        date_from: Optional[date],
        date_to: Optional[date],
    ) -> TransactionFilter:
        return replace(self, date_from=date_from, date_to=date_to)

    def with_pagination(self, page: int, size: int) -> TransactionFilter:
        return replace(self, page=page, size=size)


@dataclass(frozen=True)
class TransactionView:
    id: UUID
    iban: str
    transaction_date: date
    currency: str
    category: Category
    amount: Decimal
    import_batch_id: UUID

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> TransactionView:
        return cls(
            id=transaction.id,
            iban=transaction.iban.value,
            transaction_date=transaction.transaction_date,
            currency=transaction.currency.code,
            category=transaction.category,
            amount=transaction.amount.amount,
            import_batch_id=transaction.import_batch_id,
        )


@dataclass(frozen=True)
class TransactionPage:
    """One page of transaction views plus pagination metadata."""

    content: tuple[TransactionView, ...]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def of(
        cls,
        content: list[TransactionView],
        page: int,
        size: int,
        total_elements: int,
    ) -> TransactionPage:
        total_pages = math.ceil(total_elements / size) if size else 0
        return cls(tuple(content), page, size, total_elements, total_pages)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @property
    def is_empty(self) -> bool:
        return not self.content
