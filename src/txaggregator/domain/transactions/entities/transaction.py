"""Transaction entity."""

from __future__ import annotations

from datetime import date
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, model_validator

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError
from txaggregator.domain.shared.time import today_utc, years_before
from txaggregator.domain.transactions.value_objects import (
    Category,
    Currency,
    Iban,
    Money,
    YearMonth,
)

MAX_YEARS_IN_PAST = 10


class Transaction(BaseModel):
    """A single imported bank transaction.

    Created only by the import worker after a row parsed successfully and
    never updated afterwards; a re-import supersedes it.
    """

    id: UUID
    iban: Iban
    transaction_date: date
    currency: Currency
    category: Category
    amount: Money
    import_batch_id: UUID

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _validate_date_range(self) -> Transaction:
        today = today_utc()
        if self.transaction_date > today:
            raise ValidationError(
                f"Transaction date cannot be in the future: {self.transaction_date}",
                code=ErrorCode.INVALID_TRANSACTION,
            )

        oldest_allowed = years_before(today, MAX_YEARS_IN_PAST)
        if self.transaction_date < oldest_allowed:
            raise ValidationError(
                f"Transaction date cannot be older than {MAX_YEARS_IN_PAST} years: "
                f"{self.transaction_date}",
                code=ErrorCode.INVALID_TRANSACTION,
            )
        return self

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        iban: Iban,
        transaction_date: date,
        currency: Currency,
        category: Category,
        amount: Money,
        import_batch_id: UUID,
    ) -> Transaction:
        return cls(
            id=uuid4(),
            iban=iban,
            transaction_date=transaction_date,
            currency=currency,
            category=category,
            amount=amount,
            import_batch_id=import_batch_id,
        )

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        iban: Iban,
        transaction_date: date,
        currency: Currency,
        category: Category,
        amount: Money,
        import_batch_id: UUID,
    ) -> Transaction:
        # Stored rows were validated on import; they may since have aged past
        # the ten-year window.
        return cls.model_construct(
            id=id,
            iban=iban,
            transaction_date=transaction_date,
            currency=currency,
            category=category,
            amount=amount,
            import_batch_id=import_batch_id,
        )

    def is_income(self) -> bool:
        return self.amount.is_positive()

    def is_expense(self) -> bool:
        return self.amount.is_negative()

    @property
    def year(self) -> int:
        return self.transaction_date.year

    @property
    def month(self) -> int:
        return self.transaction_date.month

    @property
    def year_month(self) -> YearMonth:
        return YearMonth.from_date(self.transaction_date)

    def __str__(self) -> str:
        return (
            f"{self.transaction_date}: {self.amount} {self.currency} "
            f"[{self.category.value}] {self.iban}"
        )
