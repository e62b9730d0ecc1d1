"""SQLAlchemy persistence adapter."""

from txaggregator.infrastructure.persistence.sqlalchemy.database import (
    create_engine,
    create_session_maker,
    display_url,
)
from txaggregator.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from txaggregator.infrastructure.persistence.sqlalchemy.repositories import (
    ImportBatchRepositorySQLAlchemy,
    TransactionRepositorySQLAlchemy,
)

__all__ = [
    "ImportBatchRepositorySQLAlchemy",
    "TransactionRepositorySQLAlchemy",
    "create_engine",
    "create_session_maker",
    "create_tables",
    "display_url",
    "drop_tables",
]
