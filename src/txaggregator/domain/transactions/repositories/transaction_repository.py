"""Repository interface for transactions."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional, Sequence

from txaggregator.domain.transactions.entities import Transaction
from txaggregator.domain.transactions.value_objects import Category


class TransactionRepository(ABC):
    """Repository interface for persisting and querying transactions."""

    @abstractmethod
    async def save(self, transaction: Transaction) -> None:
        """Persist a single transaction."""

    @abstractmethod
    async def save_all(self, transactions: Sequence[Transaction]) -> None:
        """
        Persist a chunk of transactions atomically.

        Either every transaction of the chunk is stored or none is.

        Parameters
        ----------
        transactions
            Transactions to store (may be empty)
        """

    @abstractmethod
    async def find_by_filters(  # noqa: PLR0913
        self,
        iban: Optional[str],
        category: Optional[Category],
        date_from: Optional[date],
        date_to: Optional[date],
        page: int,
        size: int,
    ) -> list[Transaction]:
        """
        Find one page of transactions matching the optional filters.

        Parameters
        ----------
        iban
            Normalized IBAN to match exactly (optional)
        category
            Category to match (optional)
        date_from
            Inclusive lower bound on the transaction date (optional)
        date_to
            Inclusive upper bound on the transaction date (optional)
        page
            Zero-based page index
        size
            Page size

        Returns
        -------
        Transactions ordered by date, newest first
        """

    @abstractmethod
    async def count_by_filters(
        self,
        iban: Optional[str],
        category: Optional[Category],
        date_from: Optional[date],
        date_to: Optional[date],
    ) -> int:
        """Count all transactions matching the optional filters."""

    @abstractmethod
    async def find_by_date_range(
        self,
        date_from: date,
        date_to: date,
    ) -> list[Transaction]:
        """Find all transactions dated within ``[date_from, date_to]``."""

    @abstractmethod
    async def find_by_year_month(self, year: int, month: int) -> list[Transaction]:
        """Find all transactions of one calendar month."""

    @abstractmethod
    async def find_by_year(self, year: int) -> list[Transaction]:
        """Find all transactions of one calendar year."""
