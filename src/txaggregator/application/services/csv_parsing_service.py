"""Parse bank-statement CSV content into validated transaction rows.

Expected layout: a mandatory header line followed by one transaction per line
with the columns ``iban,date,currency,category,amount``. Extra columns are
ignored. Fields may be wrapped in double quotes to carry literal commas.

Row-level problems never abort the file: each offending row contributes a
single ``ParseError`` (the first failing column wins) and parsing continues.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Callable

from txaggregator.application.dtos import (
    CsvParseResult,
    ParsedTransaction,
    ParseError,
)
from txaggregator.domain.shared import DomainException, today_utc, years_before
from txaggregator.domain.transactions import Category, Currency, Iban, Money

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"
LINE_BREAK = re.compile(r"\r\n|\r|\n")
ISO_DATE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")

EXPECTED_COLUMNS = 5
IBAN_INDEX = 0
DATE_INDEX = 1
CURRENCY_INDEX = 2
CATEGORY_INDEX = 3
AMOUNT_INDEX = 4
MAX_YEARS_IN_PAST = 10


class RowError(Exception):
    """Carries the message of the first failing column of a row."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class CsvParsingService:
    """Stateless CSV parser; safe to share between concurrent imports."""

    def __init__(self, today: Callable[[], date] = today_utc):
        self._today = today

    def parse(self, content: bytes) -> CsvParseResult:
        valid: list[ParsedTransaction] = []
        errors: list[ParseError] = []

        lines = LINE_BREAK.split(_decode(content or b""))
        header = lines[0]
        if not header.strip():
            errors.append(ParseError(0, "File is empty or has no header"))
            return CsvParseResult(valid, errors, 0)

        today = self._today()
        processed = 0
        for row_number, line in enumerate(lines[1:], start=1):
            if not line.strip():
                continue
            processed += 1

            try:
                valid.append(self._parse_row(line, row_number, today))
            except RowError as e:
                errors.append(ParseError(row_number, e.message))

        logger.debug(
            "Parsed CSV: %d rows, %d valid, %d errors",
            processed,
            len(valid),
            len(errors),
        )
        return CsvParseResult(valid, errors, processed)

    def _parse_row(self, line: str, row_number: int, today: date) -> ParsedTransaction:
        columns = split_csv_line(line)
        if len(columns) < EXPECTED_COLUMNS:
            msg = f"Insufficient columns: expected {EXPECTED_COLUMNS}"
            raise RowError(msg)

        try:
            return ParsedTransaction(
                iban=_parse_iban(columns[IBAN_INDEX], row_number),
                date=_parse_date(columns[DATE_INDEX], row_number, today),
                currency=_parse_currency(columns[CURRENCY_INDEX], row_number),
                category=_parse_category(columns[CATEGORY_INDEX], row_number),
                amount=_parse_amount(columns[AMOUNT_INDEX], row_number),
            )
        except DomainException as e:
            raise RowError(e.message) from e


def split_csv_line(line: str) -> list[str]:
    """Split one line on commas outside double quotes; quotes are dropped."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def _decode(content: bytes) -> str:
    if content.startswith(UTF8_BOM):
        content = content[len(UTF8_BOM) :]
    return content.decode("utf-8", errors="replace")


def _require(value: str, field: str, row_number: int) -> str:
    if not value:
        msg = f"{field} is required at row {row_number}"
        raise RowError(msg)
    return value


def _parse_iban(value: str, row_number: int) -> Iban:
    return Iban(_require(value, "IBAN", row_number))


def _parse_date(value: str, row_number: int, today: date) -> date:
    _require(value, "Date", row_number)

    if not ISO_DATE.match(value):
        msg = f"Invalid date format: {value}"
        raise RowError(msg)
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        msg = f"Invalid date format: {value}"
        raise RowError(msg) from None

    if parsed > today:
        msg = f"Date cannot be in the future: {parsed}"
        raise RowError(msg)
    if parsed < years_before(today, MAX_YEARS_IN_PAST):
        msg = f"Date cannot be older than {MAX_YEARS_IN_PAST} years: {parsed}"
        raise RowError(msg)
    return parsed


def _parse_currency(value: str, row_number: int) -> Currency:
    return Currency(_require(value, "Currency", row_number))


def _parse_category(value: str, row_number: int) -> Category:
    category = Category.from_string(_require(value, "Category", row_number))
    if category is None:
        msg = f"Unknown category: {value}"
        raise RowError(msg)
    return category


def _parse_amount(value: str, row_number: int) -> Money:
    return Money(_require(value, "Amount", row_number))
