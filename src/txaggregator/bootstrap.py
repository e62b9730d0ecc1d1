"""Composition root wiring the import pipeline from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from txaggregator.application.queries import GetTransactionsQuery
from txaggregator.application.services import (
    CsvParsingService,
    StatisticsService,
    TransactionImportService,
)
from txaggregator.infrastructure.cache import (
    InMemoryStatisticsCache,
    NoOpStatisticsCache,
)
from txaggregator.infrastructure.persistence.sqlalchemy import (
    ImportBatchRepositorySQLAlchemy,
    TransactionRepositorySQLAlchemy,
    create_engine,
    create_session_maker,
    create_tables,
    display_url,
)
from txaggregator.infrastructure.workers import AsyncioImportWorkerPool

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from txaggregator.application.ports import StatisticsCachePort
    from txaggregator_config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ImportPipeline:
    """Every collaborator of one running pipeline, sharing one engine."""

    engine: AsyncEngine
    import_batch_repository: ImportBatchRepositorySQLAlchemy
    transaction_repository: TransactionRepositorySQLAlchemy
    statistics_cache: StatisticsCachePort
    worker_pool: AsyncioImportWorkerPool
    import_service: TransactionImportService
    statistics_service: StatisticsService
    transactions_query: GetTransactionsQuery

    async def create_schema(self) -> None:
        await create_tables(self.engine)

    async def wait_for_imports(self) -> None:
        await self.worker_pool.join()

    async def close(self) -> None:
        """Drain the worker pool, then release database connections."""
        await self.worker_pool.shutdown()
        await self.engine.dispose()


def build_pipeline(
    settings: Settings,
    engine: AsyncEngine | None = None,
) -> ImportPipeline:
    """
    Wire repositories, cache, worker pool and services.

    Parameters
    ----------
    settings
        Application settings
    engine
        Engine to use instead of one built from ``settings.database_url``
    """
    engine = engine or create_engine(settings)
    session_maker = create_session_maker(engine)

    batch_repo = ImportBatchRepositorySQLAlchemy(session_maker)
    transaction_repo = TransactionRepositorySQLAlchemy(session_maker)

    cache: StatisticsCachePort
    if settings.statistics_cache_enabled:
        cache = InMemoryStatisticsCache(ttl_seconds=settings.statistics_cache_ttl_seconds)
    else:
        cache = NoOpStatisticsCache()

    pool = AsyncioImportWorkerPool(
        core_size=settings.import_pool_core_size,
        max_size=settings.import_pool_max_size,
        queue_capacity=settings.import_queue_capacity,
        keep_alive_seconds=settings.import_worker_keep_alive_seconds,
    )

    import_service = TransactionImportService(
        import_batch_repository=batch_repo,
        transaction_repository=transaction_repo,
        csv_parsing_service=CsvParsingService(),
        statistics_cache=cache,
        dispatcher=pool,
        chunk_size=settings.import_chunk_size,
    )
    pool.bind(import_service.process_import)

    logger.debug(
        "Built import pipeline (database=%s, pool=%d/%d, cache=%s)",
        display_url(settings.database_url),
        settings.import_pool_core_size,
        settings.import_pool_max_size,
        type(cache).__name__,
    )

    return ImportPipeline(
        engine=engine,
        import_batch_repository=batch_repo,
        transaction_repository=transaction_repo,
        statistics_cache=cache,
        worker_pool=pool,
        import_service=import_service,
        statistics_service=StatisticsService(transaction_repo, cache),
        transactions_query=GetTransactionsQuery(transaction_repo),
    )
