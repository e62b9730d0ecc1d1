"""Tests for the statistics cache adapters."""

import pytest

from txaggregator.application.dtos import CategoryStatistics
from txaggregator.domain.transactions import YearMonth
from txaggregator.infrastructure.cache import (
    InMemoryStatisticsCache,
    NoOpStatisticsCache,
)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryStatisticsCache(ttl_seconds=10, clock=clock)


class TestInMemoryStatisticsCache:
    @pytest.mark.asyncio
    async def test_get_after_put(self, cache):
        value = CategoryStatistics.empty(YearMonth(2024, 3))

        await cache.put("category_stats", "2024-03", value)

        assert await cache.get("category_stats", "2024-03") is value
        assert await cache.get("iban_stats", "2024-03") is None

    @pytest.mark.asyncio
    async def test_entries_expire(self, cache, clock):
        await cache.put("category_stats", "2024-03", "v")

        clock.now = 9.9
        assert await cache.get("category_stats", "2024-03") == "v"

        clock.now = 10.0
        assert await cache.get("category_stats", "2024-03") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_evicts_only_affected_months_and_years(self, cache):
        for name in ("category_stats", "iban_stats"):
            await cache.put(name, "2024-03", "march")
            await cache.put(name, "2024-04", "april")
        await cache.put("monthly_stats", "2024", "2024")
        await cache.put("monthly_stats", "2023", "2023")

        await cache.evict_statistics_cache({YearMonth(2024, 3)})

        assert await cache.get("category_stats", "2024-03") is None
        assert await cache.get("iban_stats", "2024-03") is None
        assert await cache.get("monthly_stats", "2024") is None
        assert await cache.get("category_stats", "2024-04") == "april"
        assert await cache.get("iban_stats", "2024-04") == "april"
        assert await cache.get("monthly_stats", "2023") == "2023"

    @pytest.mark.asyncio
    async def test_evict_nothing(self, cache):
        await cache.put("category_stats", "2024-03", "v")

        await cache.evict_statistics_cache([])

        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_evict_all(self, cache):
        await cache.put("category_stats", "2024-03", "v")
        await cache.put("monthly_stats", "2024", "v")

        await cache.evict_all_statistics_cache()

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_put_with_current_generation_is_stored(self, cache):
        generation = await cache.generation("category_stats", "2024-03")

        await cache.put("category_stats", "2024-03", "v", if_generation=generation)

        assert await cache.get("category_stats", "2024-03") == "v"

    @pytest.mark.asyncio
    async def test_put_after_eviction_of_missing_entry_is_dropped(self, cache):
        generation = await cache.generation("monthly_stats", "2024")

        await cache.evict_statistics_cache({YearMonth(2024, 3)})
        await cache.put("monthly_stats", "2024", "stale", if_generation=generation)

        assert await cache.get("monthly_stats", "2024") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_eviction_of_other_month_keeps_generation(self, cache):
        generation = await cache.generation("category_stats", "2024-03")

        await cache.evict_statistics_cache({YearMonth(2024, 4)})
        await cache.put("category_stats", "2024-03", "v", if_generation=generation)

        assert await cache.get("category_stats", "2024-03") == "v"

    @pytest.mark.asyncio
    async def test_put_after_evict_all_is_dropped(self, cache):
        generation = await cache.generation("iban_stats", "2024-03")

        await cache.evict_all_statistics_cache()
        await cache.put("iban_stats", "2024-03", "stale", if_generation=generation)

        assert await cache.get("iban_stats", "2024-03") is None

    @pytest.mark.asyncio
    async def test_unguarded_put_ignores_generation(self, cache):
        await cache.evict_statistics_cache({YearMonth(2024, 3)})

        await cache.put("category_stats", "2024-03", "v")

        assert await cache.get("category_stats", "2024-03") == "v"

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError, match="ttl_seconds"):
            InMemoryStatisticsCache(ttl_seconds=0)


class TestNoOpStatisticsCache:
    @pytest.mark.asyncio
    async def test_never_returns_values(self):
        cache = NoOpStatisticsCache()

        await cache.put("category_stats", "2024-03", "v")
        await cache.evict_statistics_cache({YearMonth(2024, 3)})
        await cache.evict_all_statistics_cache()

        assert await cache.get("category_stats", "2024-03") is None
