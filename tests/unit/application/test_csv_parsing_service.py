"""Tests for CsvParsingService."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from txaggregator.application.services import CsvParsingService
from txaggregator.application.services.csv_parsing_service import split_csv_line
from txaggregator.domain.transactions import Category

from tests.shared.fixtures.factories import (
    DE_IBAN,
    PL_IBAN,
    PL_IBAN_BAD_CHECKSUM,
    csv_content,
    csv_row,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def parser() -> CsvParsingService:
    return CsvParsingService(today=lambda: TODAY)


def _row(**kwargs) -> str:
    kwargs.setdefault("day", date(2024, 6, 1))
    return csv_row(**kwargs)


class TestParseValidFiles:
    def test_parses_all_columns(self, parser):
        content = csv_content(
            [_row(iban=DE_IBAN, currency="pln", category="salary", amount="2500.5")]
        )

        result = parser.parse(content)

        assert result.errors == []
        assert result.total_rows_processed == 1
        [row] = result.valid_transactions
        assert row.iban.value == DE_IBAN
        assert row.date == date(2024, 6, 1)
        assert row.currency.code == "PLN"
        assert row.category is Category.SALARY
        assert row.amount.amount == Decimal("2500.50")

    @pytest.mark.parametrize("line_break", ["\n", "\r\n", "\r"])
    def test_accepts_any_line_break(self, parser, line_break):
        content = csv_content([_row(), _row(amount="5")], line_break=line_break)

        result = parser.parse(content)

        assert result.success_count == 2
        assert not result.has_errors()

    def test_strips_utf8_bom(self, parser):
        content = b"\xef\xbb\xbf" + csv_content([_row()])

        assert parser.parse(content).success_count == 1

    def test_header_is_not_validated(self, parser):
        content = csv_content([_row()], header="whatever;goes;here")

        assert parser.parse(content).success_count == 1

    def test_ignores_extra_columns(self, parser):
        content = csv_content([_row() + ",note,more"])

        assert parser.parse(content).success_count == 1

    def test_quoted_fields_may_contain_commas(self):
        assert split_csv_line('"a,b", c ,"d"') == ["a,b", "c", "d"]

    def test_quotes_are_removed_before_validation(self, parser):
        content = csv_content(
            [f'"{PL_IBAN}","2024-06-01","EUR","FOOD","-12.00"'],
        )

        result = parser.parse(content)

        assert result.success_count == 1
        assert result.valid_transactions[0].amount.amount == Decimal("-12.00")

    def test_today_is_accepted(self, parser):
        content = csv_content([_row(day=TODAY)])

        assert parser.parse(content).success_count == 1


class TestParseHeaderProblems:
    @pytest.mark.parametrize("content", [b"", b"\n", b"   \r\n"])
    def test_empty_file_yields_file_level_error(self, parser, content):
        result = parser.parse(content)

        assert result.valid_transactions == []
        assert result.total_rows_processed == 0
        assert [(e.row_number, e.message) for e in result.errors] == [
            (0, "File is empty or has no header"),
        ]

    def test_header_only(self, parser):
        result = parser.parse(csv_content([]))

        assert result.total_rows_processed == 0
        assert result.errors == []


class TestParseRowErrors:
    def _single_error(self, parser, row: str):
        result = parser.parse(csv_content([row]))
        assert result.valid_transactions == []
        assert len(result.errors) == 1
        return result.errors[0]

    def test_insufficient_columns(self, parser):
        error = self._single_error(parser, f"{PL_IBAN},2024-06-01,EUR,FOOD")

        assert error.row_number == 1
        assert error.message == "Insufficient columns: expected 5"

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"iban": ""}, "IBAN is required at row 1"),
            ({"currency": ""}, "Currency is required at row 1"),
            ({"category": ""}, "Category is required at row 1"),
            ({"amount": ""}, "Amount is required at row 1"),
        ],
    )
    def test_required_fields(self, parser, kwargs, message):
        assert self._single_error(parser, _row(**kwargs)).message == message

    def test_missing_date(self, parser):
        error = self._single_error(parser, f"{PL_IBAN},,EUR,FOOD,1.00")

        assert error.message == "Date is required at row 1"

    def test_invalid_iban_checksum(self, parser):
        error = self._single_error(parser, _row(iban=PL_IBAN_BAD_CHECKSUM))

        assert error.message.startswith("Invalid IBAN checksum")

    @pytest.mark.parametrize("raw", ["01/06/2024", "2024-6-1", "2024-02-30", "soon"])
    def test_invalid_date_format(self, parser, raw):
        error = self._single_error(parser, f"{PL_IBAN},{raw},EUR,FOOD,1.00")

        assert error.message == f"Invalid date format: {raw}"

    def test_future_date(self, parser):
        tomorrow = TODAY + timedelta(days=1)

        error = self._single_error(parser, _row(day=tomorrow))

        assert error.message == f"Date cannot be in the future: {tomorrow}"

    def test_date_older_than_ten_years(self, parser):
        error = self._single_error(parser, _row(day=date(2014, 6, 14)))

        assert error.message == "Date cannot be older than 10 years: 2014-06-14"

    def test_exactly_ten_years_old_is_accepted(self, parser):
        assert parser.parse(csv_content([_row(day=date(2014, 6, 15))])).success_count == 1

    def test_unknown_currency(self, parser):
        error = self._single_error(parser, _row(currency="XYZ"))

        assert error.message == "Invalid currency code: XYZ"

    def test_unknown_category(self, parser):
        error = self._single_error(parser, _row(category="PETS"))

        assert error.message == "Unknown category: PETS"

    @pytest.mark.parametrize("amount", ["0", "0.00", "abc"])
    def test_invalid_amount(self, parser, amount):
        error = self._single_error(parser, _row(amount=amount))

        assert error.message.startswith(("Amount cannot be zero", "Invalid amount"))

    def test_amount_too_large_to_store(self, parser):
        error = self._single_error(parser, _row(amount="12345678901234567.89"))

        assert error.row_number == 1
        assert error.message == "Amount exceeds maximum precision: 12345678901234567.89"

    def test_first_failing_column_wins(self, parser):
        error = self._single_error(
            parser,
            _row(iban=PL_IBAN_BAD_CHECKSUM, currency="XYZ", category="PETS"),
        )

        assert "IBAN" in error.message


class TestParseMixedFiles:
    def test_bad_rows_do_not_abort_the_file(self, parser):
        content = csv_content(
            [
                _row(),
                _row(iban=PL_IBAN_BAD_CHECKSUM),
                _row(category="FOOD", amount="3.00"),
            ],
        )

        result = parser.parse(content)

        assert result.total_rows_processed == 3
        assert result.success_count == 2
        assert [e.row_number for e in result.errors] == [2]

    def test_blank_lines_are_skipped_but_keep_row_numbers(self, parser):
        content = csv_content(["", _row(), "   ", _row(currency="XYZ"), ""])

        result = parser.parse(content)

        assert result.total_rows_processed == 2
        assert result.success_count == 1
        assert [e.row_number for e in result.errors] == [4]

    def test_every_row_is_either_valid_or_an_error(self, parser):
        rows = [_row(amount=str(i)) for i in range(-3, 4)]

        result = parser.parse(csv_content(rows))

        assert result.success_count + result.error_count == result.total_rows_processed
        assert result.error_count == 1

    def test_invalid_utf8_is_replaced_not_fatal(self, parser):
        content = csv_content([_row()]) + b"\n\xff\xfe,broken"

        result = parser.parse(content)

        assert result.success_count == 1
        assert result.errors[0].message == "Insufficient columns: expected 5"
