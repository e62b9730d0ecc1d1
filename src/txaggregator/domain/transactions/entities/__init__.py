"""Transactions domain entities."""

from txaggregator.domain.transactions.entities.transaction import Transaction

__all__ = [
    "Transaction",
]
