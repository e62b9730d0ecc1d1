"""Aggregate statistics over stored transactions.

All three reports are pure reads. When a ``StatisticsCachePort`` is given,
results are served read-through from it; the import worker evicts the
affected entries after every completed batch.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Optional

from txaggregator.application.dtos import (
    CategoryStatistics,
    CategorySummary,
    IbanStatistics,
    IbanSummary,
    MonthlyStatistics,
    MonthlySummary,
)
from txaggregator.application.ports import (
    CATEGORY_STATS_CACHE,
    IBAN_STATS_CACHE,
    MONTHLY_STATS_CACHE,
    month_key,
    year_key,
)
from txaggregator.domain.transactions import Transaction, YearMonth

if TYPE_CHECKING:
    from txaggregator.application.ports import StatisticsCachePort
    from txaggregator.domain.transactions import TransactionRepository

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


class StatisticsService:
    """Per-category, per-IBAN and per-month statistics."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        cache: Optional[StatisticsCachePort] = None,
    ):
        self._transaction_repo = transaction_repository
        self._cache = cache

    async def get_statistics_by_category(self, month: YearMonth) -> CategoryStatistics:
        return await self._cached(
            CATEGORY_STATS_CACHE,
            month_key(month),
            lambda: self._compute_by_category(month),
        )

    async def get_statistics_by_iban(self, month: YearMonth) -> IbanStatistics:
        return await self._cached(
            IBAN_STATS_CACHE,
            month_key(month),
            lambda: self._compute_by_iban(month),
        )

    async def get_statistics_by_month(self, year: int) -> MonthlyStatistics:
        return await self._cached(
            MONTHLY_STATS_CACHE,
            year_key(year),
            lambda: self._compute_by_month(year),
        )

    async def _cached(
        self,
        cache_name: str,
        key: str,
        compute: Callable[[], Awaitable[Any]],
    ) -> Any:
        if self._cache is None:
            return await compute()

        cached = await self._cache.get(cache_name, key)
        if cached is not None:
            logger.debug("Cache hit %s[%s]", cache_name, key)
            return cached

        # an import finishing during compute() bumps the generation
        generation = await self._cache.generation(cache_name, key)
        result = await compute()
        await self._cache.put(cache_name, key, result, if_generation=generation)
        return result

    async def _compute_by_category(self, month: YearMonth) -> CategoryStatistics:
        transactions = await self._transaction_repo.find_by_year_month(
            month.year,
            month.month,
        )
        if not transactions:
            return CategoryStatistics.empty(month)

        grouped: dict = defaultdict(list)
        for tx in transactions:
            grouped[tx.category].append(tx)

        summaries = [
            CategorySummary(
                category=category,
                total_amount=_total(txs),
                transaction_count=len(txs),
            )
            for category, txs in grouped.items()
        ]
        summaries.sort(key=lambda s: s.category.name)
        return CategoryStatistics(month, tuple(summaries))

    async def _compute_by_iban(self, month: YearMonth) -> IbanStatistics:
        transactions = await self._transaction_repo.find_by_year_month(
            month.year,
            month.month,
        )
        if not transactions:
            return IbanStatistics.empty(month)

        grouped: dict = defaultdict(list)
        for tx in transactions:
            grouped[tx.iban.value].append(tx)

        summaries = [
            IbanSummary(
                iban=iban,
                total_income=_income(txs),
                total_expense=_expense(txs),
            )
            for iban, txs in grouped.items()
        ]
        summaries.sort(key=lambda s: s.iban)
        return IbanStatistics(month, tuple(summaries))

    async def _compute_by_month(self, year: int) -> MonthlyStatistics:
        transactions = await self._transaction_repo.find_by_year(year)
        if not transactions:
            return MonthlyStatistics.empty(year)

        grouped: dict = defaultdict(list)
        for tx in transactions:
            grouped[tx.year_month].append(tx)

        summaries = [
            MonthlySummary(
                month=month,
                total_income=_income(txs),
                total_expense=_expense(txs),
            )
            for month, txs in sorted(grouped.items())
        ]
        return MonthlyStatistics(year, tuple(summaries))


def _total(transactions: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount.amount for tx in transactions), ZERO)


def _income(transactions: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount.amount for tx in transactions if tx.is_income()), ZERO)


def _expense(transactions: Iterable[Transaction]) -> Decimal:
    return sum((tx.amount.amount for tx in transactions if tx.is_expense()), ZERO)
