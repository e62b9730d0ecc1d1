"""Asynchronous import workers."""

from txaggregator.infrastructure.workers.worker_pool import AsyncioImportWorkerPool

__all__ = [
    "AsyncioImportWorkerPool",
]
