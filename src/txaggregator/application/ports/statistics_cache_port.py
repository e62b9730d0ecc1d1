"""Statistics cache port. Interface for caching aggregate statistics."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from txaggregator.domain.transactions import YearMonth

CATEGORY_STATS_CACHE = "category_stats"
IBAN_STATS_CACHE = "iban_stats"
MONTHLY_STATS_CACHE = "monthly_stats"

STATISTICS_CACHES = (CATEGORY_STATS_CACHE, IBAN_STATS_CACHE, MONTHLY_STATS_CACHE)


class StatisticsCachePort(ABC):
    """Port for the statistics read-through cache.

    Entries of ``category_stats`` and ``iban_stats`` are keyed by ``YYYY-MM``,
    entries of ``monthly_stats`` by the four-digit year.
    """

    @abstractmethod
    async def get(self, cache_name: str, key: str) -> Optional[Any]:
        """Return the cached value or None on a miss."""

    @abstractmethod
    async def generation(self, cache_name: str, key: str) -> int:
        """
        Return a token that changes whenever ``(cache_name, key)`` is evicted.

        Read it before computing a value; passing it to ``put`` keeps a value
        computed across an eviction from being stored.
        """

    @abstractmethod
    async def put(
        self,
        cache_name: str,
        key: str,
        value: Any,
        if_generation: Optional[int] = None,
    ) -> None:
        """
        Store a value under ``(cache_name, key)``.

        With ``if_generation`` the value is only stored while the entry's
        generation still equals it; otherwise the call does nothing.
        """

    @abstractmethod
    async def evict_statistics_cache(self, affected_months: Iterable[YearMonth]) -> None:
        """
        Evict every entry that may include data of the given months.

        That is the month-keyed category and IBAN entries of each month plus
        the yearly entry of each touched year. An empty collection is a no-op.
        """

    @abstractmethod
    async def evict_all_statistics_cache(self) -> None:
        """Evict all statistics entries."""


def month_key(month: YearMonth) -> str:
    return str(month)


def year_key(year: int) -> str:
    return str(year)
