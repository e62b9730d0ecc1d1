"""Value objects of the transactions domain."""

from txaggregator.domain.transactions.value_objects.category import Category
from txaggregator.domain.transactions.value_objects.currency import Currency
from txaggregator.domain.transactions.value_objects.file_checksum import FileChecksum
from txaggregator.domain.transactions.value_objects.iban import Iban, normalize_iban
from txaggregator.domain.transactions.value_objects.import_status import ImportStatus
from txaggregator.domain.transactions.value_objects.money import Money
from txaggregator.domain.transactions.value_objects.year_month import YearMonth

__all__ = [
    "Category",
    "Currency",
    "FileChecksum",
    "Iban",
    "ImportStatus",
    "Money",
    "YearMonth",
    "normalize_iban",
]
