"""Process-local statistics cache with per-entry time-to-live."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Optional

from txaggregator.application.ports import (
    CATEGORY_STATS_CACHE,
    IBAN_STATS_CACHE,
    MONTHLY_STATS_CACHE,
    StatisticsCachePort,
    month_key,
    year_key,
)
from txaggregator.domain.transactions import YearMonth

logger = logging.getLogger(__name__)


class InMemoryStatisticsCache(StatisticsCachePort):
    """Dictionary-backed cache; entries expire ``ttl_seconds`` after ``put``.

    Every eviction bumps the generation of the evicted keys, whether or not
    an entry was stored, so a ``put`` guarded by an older generation is
    dropped. ``evict_all_statistics_cache`` bumps a global epoch instead.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            msg = f"ttl_seconds must be positive: {ttl_seconds}"
            raise ValueError(msg)
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[float, Any]] = {}
        self._generations: dict[tuple[str, str], int] = {}
        self._epoch = 0

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, cache_name: str, key: str) -> Optional[Any]:
        entry = self._entries.get((cache_name, key))
        if entry is None:
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[(cache_name, key)]
            return None
        return value

    async def generation(self, cache_name: str, key: str) -> int:
        return self._current_generation((cache_name, key))

    async def put(
        self,
        cache_name: str,
        key: str,
        value: Any,
        if_generation: Optional[int] = None,
    ) -> None:
        entry_key = (cache_name, key)
        current = self._current_generation(entry_key)
        if if_generation is not None and if_generation != current:
            logger.debug("Dropping stale value for %s[%s]", cache_name, key)
            return
        self._entries[entry_key] = (self._clock() + self._ttl, value)

    async def evict_statistics_cache(self, affected_months: Iterable[YearMonth]) -> None:
        months = set(affected_months)
        if not months:
            return

        for month in months:
            self._evict((CATEGORY_STATS_CACHE, month_key(month)))
            self._evict((IBAN_STATS_CACHE, month_key(month)))

        for year in {month.year for month in months}:
            self._evict((MONTHLY_STATS_CACHE, year_key(year)))

        logger.debug(
            "Evicted statistics cache for months: %s",
            ", ".join(str(m) for m in sorted(months)),
        )

    async def evict_all_statistics_cache(self) -> None:
        self._entries.clear()
        self._epoch += 1
        logger.debug("Evicted all statistics caches")

    def _evict(self, entry_key: tuple[str, str]) -> None:
        self._entries.pop(entry_key, None)
        self._generations[entry_key] = self._generations.get(entry_key, 0) + 1

    def _current_generation(self, entry_key: tuple[str, str]) -> int:
        # both parts only grow, so any eviction changes the sum
        return self._epoch + self._generations.get(entry_key, 0)
