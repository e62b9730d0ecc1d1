"""Statistics cache that stores nothing (caching disabled)."""

import logging
from typing import Any, Iterable, Optional

from txaggregator.application.ports import StatisticsCachePort
from txaggregator.domain.transactions import YearMonth

logger = logging.getLogger(__name__)


class NoOpStatisticsCache(StatisticsCachePort):
    async def get(self, cache_name: str, key: str) -> Optional[Any]:
        return None

    async def generation(self, cache_name: str, key: str) -> int:
        return 0

    async def put(
        self,
        cache_name: str,
        key: str,
        value: Any,
        if_generation: Optional[int] = None,
    ) -> None:
        return None

    async def evict_statistics_cache(self, affected_months: Iterable[YearMonth]) -> None:
        logger.debug(
            "No-op cache: would evict statistics for months: %s",
            sorted(str(m) for m in affected_months),
        )

    async def evict_all_statistics_cache(self) -> None:
        logger.debug("No-op cache: would evict all statistics caches")
