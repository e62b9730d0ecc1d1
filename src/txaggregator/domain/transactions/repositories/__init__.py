"""Repository interfaces of the transactions domain."""

from txaggregator.domain.transactions.repositories.import_batch_repository import (
    ImportBatchRepository,
)
from txaggregator.domain.transactions.repositories.transaction_repository import (
    TransactionRepository,
)

__all__ = [
    "ImportBatchRepository",
    "TransactionRepository",
]
