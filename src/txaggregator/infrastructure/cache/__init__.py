"""Statistics cache adapters."""

from txaggregator.infrastructure.cache.in_memory_statistics_cache import (
    InMemoryStatisticsCache,
)
from txaggregator.infrastructure.cache.no_op_statistics_cache import (
    NoOpStatisticsCache,
)

__all__ = [
    "InMemoryStatisticsCache",
    "NoOpStatisticsCache",
]
