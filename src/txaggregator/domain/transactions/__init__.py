"""Transactions bounded context: imported bank transactions and import batches."""

from txaggregator.domain.transactions.aggregates import ImportBatch, ImportError
from txaggregator.domain.transactions.entities import Transaction
from txaggregator.domain.transactions.exceptions import (
    BatchNotFoundError,
    DuplicateImportError,
    InvalidStateTransitionError,
)
from txaggregator.domain.transactions.repositories import (
    ImportBatchRepository,
    TransactionRepository,
)
from txaggregator.domain.transactions.value_objects import (
    Category,
    Currency,
    FileChecksum,
    Iban,
    ImportStatus,
    Money,
    YearMonth,
)

__all__ = [
    "BatchNotFoundError",
    "Category",
    "Currency",
    "DuplicateImportError",
    "FileChecksum",
    "Iban",
    "ImportBatch",
    "ImportBatchRepository",
    "ImportError",
    "ImportStatus",
    "InvalidStateTransitionError",
    "Money",
    "Transaction",
    "TransactionRepository",
    "YearMonth",
]
