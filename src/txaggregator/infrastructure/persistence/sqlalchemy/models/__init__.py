"""SQLAlchemy models.

Importing this package registers every table with ``Base.metadata``.
"""

from txaggregator.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    CreatedAtMixin,
)
from txaggregator.infrastructure.persistence.sqlalchemy.models.import_batch_model import (  # noqa: E501
    IN_PROGRESS_CHECKSUM_INDEX,
    ImportBatchModel,
)
from txaggregator.infrastructure.persistence.sqlalchemy.models.transaction_model import (  # noqa: E501
    TransactionModel,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "IN_PROGRESS_CHECKSUM_INDEX",
    "ImportBatchModel",
    "TransactionModel",
]
