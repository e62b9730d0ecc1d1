"""Transactions domain aggregates."""

from txaggregator.domain.transactions.aggregates.import_batch import (
    ImportBatch,
    ImportError,
)

__all__ = [
    "ImportBatch",
    "ImportError",
]
