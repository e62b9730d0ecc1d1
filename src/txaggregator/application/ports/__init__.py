"""Application ports implemented by infrastructure adapters."""

from txaggregator.application.ports.import_dispatcher import (
    ImportDispatcher,
    ImportHandler,
)
from txaggregator.application.ports.statistics_cache_port import (
    CATEGORY_STATS_CACHE,
    IBAN_STATS_CACHE,
    MONTHLY_STATS_CACHE,
    STATISTICS_CACHES,
    StatisticsCachePort,
    month_key,
    year_key,
)

__all__ = [
    "CATEGORY_STATS_CACHE",
    "IBAN_STATS_CACHE",
    "MONTHLY_STATS_CACHE",
    "STATISTICS_CACHES",
    "ImportDispatcher",
    "ImportHandler",
    "StatisticsCachePort",
    "month_key",
    "year_key",
]
