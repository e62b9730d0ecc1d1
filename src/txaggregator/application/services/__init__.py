"""Application services."""

from txaggregator.application.services.csv_parsing_service import (
    CsvParsingService,
    split_csv_line,
)
from txaggregator.application.services.statistics_service import StatisticsService
from txaggregator.application.services.transaction_import_service import (
    TransactionImportService,
)

__all__ = [
    "CsvParsingService",
    "StatisticsService",
    "TransactionImportService",
    "split_csv_line",
]
