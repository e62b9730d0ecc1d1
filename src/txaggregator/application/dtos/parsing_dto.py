"""DTOs produced by the CSV parser."""

from dataclasses import dataclass, field
from datetime import date

from txaggregator.domain.transactions import Category, Currency, Iban, Money


@dataclass(frozen=True)
class ParsedTransaction:
    """A CSV row that passed every column check."""

    iban: Iban
    date: date
    currency: Currency
    category: Category
    amount: Money


@dataclass(frozen=True)
class ParseError:
    """A row-scoped parse failure; row 0 refers to the whole file."""

    row_number: int
    message: str


@dataclass(frozen=True)
class CsvParseResult:
    valid_transactions: list[ParsedTransaction] = field(default_factory=list)
    errors: list[ParseError] = field(default_factory=list)
    total_rows_processed: int = 0

    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def success_count(self) -> int:
        return len(self.valid_transactions)

    @property
    def error_count(self) -> int:
        return len(self.errors)
