"""SQLAlchemy model for imported transactions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from txaggregator.domain.transactions import Category
from txaggregator.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    CreatedAtMixin,
)


class TransactionModel(Base, CreatedAtMixin):
    """Database model for imported bank transactions."""

    __tablename__ = "transactions"

    __table_args__ = (
        Index("ix_transactions_date", "transaction_date"),
        Index("ix_transactions_iban", "iban"),
        Index("ix_transactions_category", "category"),
        Index("ix_transactions_import_batch_id", "import_batch_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    iban: Mapped[str] = mapped_column(String(34), nullable=False)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    category: Mapped[Category] = mapped_column(
        SQLEnum(
            Category,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        nullable=False,
    )

    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=15, scale=2),
        nullable=False,
    )

    import_batch_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("import_batches.id", ondelete="RESTRICT"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<TransactionModel(id={self.id}, "
            f"date={self.transaction_date}, "
            f"amount={self.amount} {self.currency})>"
        )
