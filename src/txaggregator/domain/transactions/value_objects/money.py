"""Value object for signed monetary amounts."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError

TWO_PLACES = Decimal("0.01")
# amounts are stored as NUMERIC(15, 2)
MAX_INTEGER_DIGITS = 13
AMOUNT_LIMIT = Decimal(10) ** MAX_INTEGER_DIGITS


def _invalid(message: str) -> ValidationError:
    return ValidationError(message, code=ErrorCode.INVALID_AMOUNT)


class Money(BaseModel):
    """Non-zero amount with exactly two fraction digits.

    The sign carries the direction: positive is income, negative is expense.
    Construction rounds half-up, so ``Money("100.999")`` is ``101.00``.
    """

    amount: Decimal

    model_config = ConfigDict(frozen=True)

    # allow positional construction Money("12.50")
    def __init__(self, amount: Decimal | float | str | None = None, **data: Any):
        if "amount" not in data:
            data["amount"] = amount
        super().__init__(**data)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Decimal:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise _invalid("Amount cannot be null or blank")

        if isinstance(v, bool):
            raise _invalid(f"Invalid amount format: {v}")

        if not isinstance(v, Decimal):
            try:
                v = Decimal(str(v).strip())
            except InvalidOperation:
                raise _invalid(f"Invalid amount format: {v}") from None

        if not v.is_finite():
            raise _invalid(f"Invalid amount format: {v}")

        try:
            amount = v.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise _invalid(f"Invalid amount format: {v}") from None

        if amount == 0:
            raise _invalid("Amount cannot be zero")

        if abs(amount) >= AMOUNT_LIMIT:
            raise _invalid(f"Amount exceeds maximum precision: {v}")

        return amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __neg__(self) -> Money:
        return Money(-self.amount)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    def add(self, other: Money) -> Money:
        return self + other

    def negate(self) -> Money:
        return -self

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def abs(self) -> Money:
        return Money(abs(self.amount))
