"""SQLAlchemy repository implementations."""

from txaggregator.infrastructure.persistence.sqlalchemy.repositories.import_batch_repository import (  # noqa: E501
    ImportBatchRepositorySQLAlchemy,
)
from txaggregator.infrastructure.persistence.sqlalchemy.repositories.transaction_repository import (  # noqa: E501
    TransactionRepositorySQLAlchemy,
)

__all__ = [
    "ImportBatchRepositorySQLAlchemy",
    "TransactionRepositorySQLAlchemy",
]
