"""Read-only application queries."""

from txaggregator.application.queries.get_transactions_query import (
    GetTransactionsQuery,
)

__all__ = [
    "GetTransactionsQuery",
]
