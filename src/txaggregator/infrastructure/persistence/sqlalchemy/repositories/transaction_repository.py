"""SQLAlchemy implementation of TransactionRepository."""

from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txaggregator.domain.transactions import (
    Category,
    Currency,
    Iban,
    Money,
    Transaction,
    TransactionRepository,
    YearMonth,
)
from txaggregator.infrastructure.persistence.sqlalchemy.models import TransactionModel


class TransactionRepositorySQLAlchemy(TransactionRepository):
    """SQLAlchemy implementation of TransactionRepository."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def save(self, transaction: Transaction) -> None:
        await self.save_all([transaction])

    async def save_all(self, transactions: Sequence[Transaction]) -> None:
        if not transactions:
            return

        async with self._session_maker.begin() as session:
            session.add_all([self._domain_to_model(tx) for tx in transactions])

    async def find_by_filters(  # noqa: PLR0913
        self,
        iban: Optional[str],
        category: Optional[Category],
        date_from: Optional[date],
        date_to: Optional[date],
        page: int,
        size: int,
    ) -> list[Transaction]:
        stmt = _apply_filters(
            select(TransactionModel),
            iban,
            category,
            date_from,
            date_to,
        )
        stmt = (
            stmt.order_by(
                TransactionModel.transaction_date.desc(),
                TransactionModel.id,
            )
            .offset(page * size)
            .limit(size)
        )
        return await self._fetch(stmt)

    async def count_by_filters(
        self,
        iban: Optional[str],
        category: Optional[Category],
        date_from: Optional[date],
        date_to: Optional[date],
    ) -> int:
        stmt = _apply_filters(
            select(func.count(TransactionModel.id)),
            iban,
            category,
            date_from,
            date_to,
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def find_by_date_range(
        self,
        date_from: date,
        date_to: date,
    ) -> list[Transaction]:
        stmt = (
            select(TransactionModel)
            .where(
                TransactionModel.transaction_date >= date_from,
                TransactionModel.transaction_date <= date_to,
            )
            .order_by(TransactionModel.transaction_date, TransactionModel.id)
        )
        return await self._fetch(stmt)

    async def find_by_year_month(self, year: int, month: int) -> list[Transaction]:
        period = YearMonth(year, month)
        return await self.find_by_date_range(period.first_day, period.last_day)

    async def find_by_year(self, year: int) -> list[Transaction]:
        return await self.find_by_date_range(date(year, 1, 1), date(year, 12, 31))

    async def _fetch(self, stmt: Select) -> list[Transaction]:
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._model_to_domain(model) for model in models]

    def _domain_to_model(self, transaction: Transaction) -> TransactionModel:
        return TransactionModel(
            id=transaction.id,
            iban=transaction.iban.value,
            transaction_date=transaction.transaction_date,
            currency=transaction.currency.code,
            category=transaction.category,
            amount=transaction.amount.amount,
            import_batch_id=transaction.import_batch_id,
        )

    def _model_to_domain(self, model: TransactionModel) -> Transaction:
        return Transaction.reconstitute(
            id=model.id,
            iban=Iban(model.iban),
            transaction_date=model.transaction_date,
            currency=Currency(model.currency),
            category=model.category,
            amount=Money(model.amount),
            import_batch_id=model.import_batch_id,
        )


def _apply_filters(
    stmt: Select,
    iban: Optional[str],
    category: Optional[Category],
    date_from: Optional[date],
    date_to: Optional[date],
) -> Select:
    if iban:
        stmt = stmt.where(TransactionModel.iban == iban)
    if category:
        stmt = stmt.where(TransactionModel.category == category)
    if date_from:
        stmt = stmt.where(TransactionModel.transaction_date >= date_from)
    if date_to:
        stmt = stmt.where(TransactionModel.transaction_date <= date_to)
    return stmt
