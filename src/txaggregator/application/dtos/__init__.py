"""Data Transfer Objects for the outer layers.

DTOs decouple callers (CLI, a future HTTP transport) from domain models:
- import_dto: import command, result and status view
- parsing_dto: CSV parser output
- statistics_dto: aggregate statistics
- transaction_dto: transaction query filter, view and page
"""

from txaggregator.application.dtos.import_dto import (
    ErrorDetail,
    ImportCommand,
    ImportResult,
    ImportStatusView,
)
from txaggregator.application.dtos.parsing_dto import (
    CsvParseResult,
    ParsedTransaction,
    ParseError,
)
from txaggregator.application.dtos.statistics_dto import (
    CategoryStatistics,
    CategorySummary,
    IbanStatistics,
    IbanSummary,
    MonthlyStatistics,
    MonthlySummary,
)
from txaggregator.application.dtos.transaction_dto import (
    TransactionFilter,
    TransactionPage,
    TransactionView,
)

__all__ = [
    "CategoryStatistics",
    "CategorySummary",
    "CsvParseResult",
    "ErrorDetail",
    "IbanStatistics",
    "IbanSummary",
    "ImportCommand",
    "ImportResult",
    "ImportStatusView",
    "MonthlyStatistics",
    "MonthlySummary",
    "ParseError",
    "ParsedTransaction",
    "TransactionFilter",
    "TransactionPage",
    "TransactionView",
]
