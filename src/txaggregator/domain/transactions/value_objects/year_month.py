"""Calendar month value object."""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError

_YEAR_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True, order=True)
class YearMonth:
    """A (year, month) pair; ordering is chronological."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValidationError(
                f"Month must be between 1 and 12: {self.month}",
                code=ErrorCode.INVALID_DATE,
            )
        if not 1 <= self.year <= 9999:
            raise ValidationError(
                f"Year out of range: {self.year}",
                code=ErrorCode.INVALID_DATE,
            )

    @classmethod
    def from_date(cls, value: date) -> YearMonth:
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, value: str) -> YearMonth:
        match = _YEAR_MONTH_PATTERN.match(value.strip()) if value else None
        if not match:
            raise ValidationError(
                f"Invalid month format (expected YYYY-MM): {value}",
                code=ErrorCode.INVALID_DATE,
            )
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"
