"""Transaction list query - read stored transactions without side effects."""

from txaggregator.application.dtos import (
    TransactionFilter,
    TransactionPage,
    TransactionView,
)
from txaggregator.domain.transactions import TransactionRepository


class GetTransactionsQuery:
    """Query for one filtered page of transactions, newest first."""

    def __init__(self, transaction_repository: TransactionRepository):
        self._transaction_repo = transaction_repository

    async def execute(self, transaction_filter: TransactionFilter) -> TransactionPage:
        transactions = await self._transaction_repo.find_by_filters(
            iban=transaction_filter.iban,
            category=transaction_filter.category,
            date_from=transaction_filter.date_from,
            date_to=transaction_filter.date_to,
            page=transaction_filter.page,
            size=transaction_filter.size,
        )
        total = await self._transaction_repo.count_by_filters(
            iban=transaction_filter.iban,
            category=transaction_filter.category,
            date_from=transaction_filter.date_from,
            date_to=transaction_filter.date_to,
        )

        return TransactionPage.of(
            [TransactionView.from_transaction(tx) for tx in transactions],
            page=transaction_filter.page,
            size=transaction_filter.size,
            total_elements=total,
        )
