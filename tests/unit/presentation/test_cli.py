"""Tests for the txagg command line interface."""

import importlib
from uuid import uuid4

import pytest
from typer.testing import CliRunner

from txaggregator_config import clear_settings_cache

from tests.shared.fixtures.factories import (
    PL_IBAN_BAD_CHECKSUM,
    csv_content,
    csv_row,
    last_month,
)

# The package re-exports the Typer instance under the module name.
cli_module = importlib.import_module("txaggregator.presentation.cli.app")
runner = CliRunner()


@pytest.fixture(autouse=True)
def sqlite_settings(tmp_path, monkeypatch):
    """Point the CLI at a throwaway SQLite file."""
    monkeypatch.setenv("DB_URL", f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setattr(cli_module, "_configure_logging", lambda: None)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def statement(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_bytes(
        csv_content(
            [
                csv_row(category="FOOD", amount="-10.00"),
                csv_row(category="FOOD", amount="-5.50"),
                csv_row(iban=PL_IBAN_BAD_CHECKSUM),
            ],
        ),
    )
    return path


class TestDbCommands:
    def test_init(self):
        result = runner.invoke(cli_module.app, ["db", "init"])

        assert result.exit_code == 0, result.output
        assert "Database initialized" in result.output

    def test_drop_with_force(self):
        runner.invoke(cli_module.app, ["db", "init"])

        result = runner.invoke(cli_module.app, ["db", "drop", "--force"])

        assert result.exit_code == 0, result.output
        assert "Database tables dropped" in result.output

    def test_drop_aborts_without_confirmation(self):
        result = runner.invoke(cli_module.app, ["db", "drop"], input="n\n")

        assert result.exit_code == 1
        assert "Aborted" in result.output


class TestImportCommand:
    def test_import_waits_for_final_status(self, statement):
        result = runner.invoke(cli_module.app, ["import", str(statement)])

        assert result.exit_code == 0, result.output
        assert "Import started" in result.output
        assert "completed" in result.output
        assert "Invalid IBAN checksum" in result.output

    def test_reimport_reports_duplicate(self, statement):
        runner.invoke(cli_module.app, ["import", str(statement)])

        result = runner.invoke(cli_module.app, ["import", str(statement)])

        assert result.exit_code == 0, result.output
        assert "File already imported" in result.output

    def test_missing_file_is_rejected(self, tmp_path):
        result = runner.invoke(cli_module.app, ["import", str(tmp_path / "nope.csv")])

        assert result.exit_code == 2

    def test_empty_file_is_a_validation_error(self, tmp_path):
        empty = tmp_path / "empty.csv"
        empty.write_bytes(b"")

        result = runner.invoke(cli_module.app, ["import", str(empty)])

        assert result.exit_code == 1
        assert "Content cannot be null or empty" in result.output


class TestStatusCommand:
    def test_unknown_import(self):
        result = runner.invoke(cli_module.app, ["status", str(uuid4())])

        assert result.exit_code == 1
        assert "Import not found" in result.output

    def test_malformed_id_is_not_found(self):
        result = runner.invoke(cli_module.app, ["status", "not-a-uuid"])

        assert result.exit_code == 1


class TestQueryCommands:
    def test_transactions_lists_stored_rows(self, statement):
        runner.invoke(cli_module.app, ["import", str(statement)])

        result = runner.invoke(cli_module.app, ["transactions", "--category", "food"])

        assert result.exit_code == 0, result.output
        assert "2 total" in result.output
        assert "-10.00" in result.output

    def test_transactions_rejects_unknown_category(self):
        result = runner.invoke(cli_module.app, ["transactions", "--category", "PETS"])

        assert result.exit_code == 2

    def test_transactions_rejects_bad_date(self):
        result = runner.invoke(cli_module.app, ["transactions", "--from", "01.01.2024"])

        assert result.exit_code == 2

    def test_stats_category(self, statement):
        runner.invoke(cli_module.app, ["import", str(statement)])

        result = runner.invoke(
            cli_module.app,
            ["stats", "category", str(last_month())],
        )

        assert result.exit_code == 0, result.output
        assert "Food & Groceries" in result.output
        assert "-15.50" in result.output

    def test_stats_iban_and_monthly(self, statement):
        runner.invoke(cli_module.app, ["import", str(statement)])
        month = last_month()

        by_iban = runner.invoke(cli_module.app, ["stats", "iban", str(month)])
        monthly = runner.invoke(cli_module.app, ["stats", "monthly", str(month.year)])

        assert by_iban.exit_code == 0, by_iban.output
        assert monthly.exit_code == 0, monthly.output
        assert str(month) in monthly.output

    def test_stats_rejects_bad_month(self):
        result = runner.invoke(cli_module.app, ["stats", "category", "2024-13"])

        assert result.exit_code == 2
