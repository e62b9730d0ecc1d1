"""
End-to-end tests of the import pipeline.

Upload -> PENDING batch -> worker pool -> parser -> chunked storage ->
terminal status -> statistics and queries, all on one SQLite file.
"""

import asyncio
from decimal import Decimal

import pytest

from txaggregator.application.dtos import TransactionFilter
from txaggregator.application.services import StatisticsService
from txaggregator.domain.transactions import Category, ImportStatus

from tests.shared.fixtures.factories import (
    DE_IBAN,
    PL_IBAN,
    PL_IBAN_BAD_CHECKSUM,
    csv_content,
    csv_row,
    day_in,
    last_month,
)

pytestmark = pytest.mark.e2e


@pytest.fixture
def month():
    return last_month()


@pytest.fixture
def four_rows(month):
    return csv_content(
        [
            csv_row(PL_IBAN, day_in(month, 2), "EUR", "FOOD", "-42.10"),
            csv_row(PL_IBAN, day_in(month, 3), "EUR", "TRANSPORT", "-15.00"),
            csv_row(DE_IBAN, day_in(month, 4), "EUR", "FOOD", "-7.90"),
            csv_row(PL_IBAN, day_in(month, 1), "EUR", "SALARY", "3200.00"),
        ],
    )


class TestSuccessfulImport:
    @pytest.mark.asyncio
    async def test_import_completes_and_feeds_statistics(
        self,
        pipeline,
        four_rows,
        month,
    ):
        result = await pipeline.import_service.import_transactions(
            "statement.csv",
            four_rows,
        )
        assert result.status == ImportStatus.PROCESSING
        assert result.message == "Import started"

        await pipeline.wait_for_imports()
        view = await pipeline.import_service.get_status(result.import_id)

        assert view.status == ImportStatus.COMPLETED
        assert view.total_rows == 4
        assert view.success_count == 4
        assert view.error_count == 0
        assert view.completed_at is not None

        stats = await pipeline.statistics_service.get_statistics_by_category(month)
        by_category = {s.category: s for s in stats.categories}
        assert by_category[Category.FOOD].transaction_count == 2
        assert by_category[Category.FOOD].total_amount == Decimal("-50.00")
        assert by_category[Category.TRANSPORT].total_amount == Decimal("-15.00")
        assert by_category[Category.SALARY].total_amount == Decimal("3200.00")

        by_iban = await pipeline.statistics_service.get_statistics_by_iban(month)
        assert [s.iban for s in by_iban.ibans] == [DE_IBAN, PL_IBAN]
        assert by_iban.ibans[1].balance == Decimal("3142.90")

        monthly = await pipeline.statistics_service.get_statistics_by_month(month.year)
        assert [s.month for s in monthly.months] == [month]

    @pytest.mark.asyncio
    async def test_query_pages_newest_first(self, pipeline, four_rows, month):
        await pipeline.import_service.import_transactions("s.csv", four_rows)
        await pipeline.wait_for_imports()

        page = await pipeline.transactions_query.execute(
            TransactionFilter(iban=PL_IBAN, page=0, size=2),
        )

        assert page.total_elements == 3
        assert page.total_pages == 2
        assert [v.transaction_date for v in page.content] == [
            day_in(month, 3),
            day_in(month, 2),
        ]


class TestPartialFailure:
    @pytest.mark.asyncio
    async def test_invalid_row_is_reported_and_others_stored(self, pipeline, month):
        content = csv_content(
            [
                csv_row(PL_IBAN, day_in(month, 1), "EUR", "FOOD", "-1.00"),
                csv_row(PL_IBAN_BAD_CHECKSUM, day_in(month, 2), "EUR", "FOOD", "-2.00"),
                csv_row(DE_IBAN, day_in(month, 3), "EUR", "OTHER", "-3.00"),
            ],
        )

        result = await pipeline.import_service.import_transactions("p.csv", content)
        await pipeline.wait_for_imports()
        view = await pipeline.import_service.get_status(result.import_id)

        assert view.status == ImportStatus.COMPLETED
        assert view.total_rows == 3
        assert view.success_count == 2
        assert view.error_count == 1
        assert view.errors[0].row == 2
        assert "IBAN" in view.errors[0].message

        page = await pipeline.transactions_query.execute(TransactionFilter())
        assert page.total_elements == 2

    @pytest.mark.asyncio
    async def test_amount_too_large_to_store_is_a_row_error(self, pipeline, month):
        content = csv_content(
            [
                csv_row(day=day_in(month, 1), amount="12345678901234567.89"),
                csv_row(day=day_in(month, 2), amount="9999999999999.99"),
            ],
        )

        result = await pipeline.import_service.import_transactions("big.csv", content)
        await pipeline.wait_for_imports()
        view = await pipeline.import_service.get_status(result.import_id)

        assert view.status == ImportStatus.COMPLETED
        assert view.success_count == 1
        assert view.errors[0].row == 1
        assert view.errors[0].message == (
            "Amount exceeds maximum precision: 12345678901234567.89"
        )

        page = await pipeline.transactions_query.execute(TransactionFilter())
        assert [v.amount for v in page.content] == [Decimal("9999999999999.99")]


class TestDeduplication:
    @pytest.mark.asyncio
    async def test_reimport_of_completed_file_is_a_duplicate(
        self,
        pipeline,
        four_rows,
    ):
        first = await pipeline.import_service.import_transactions("a.csv", four_rows)
        await pipeline.wait_for_imports()

        second = await pipeline.import_service.import_transactions("b.csv", four_rows)
        await pipeline.wait_for_imports()

        assert second.import_id == first.import_id
        assert second.status == ImportStatus.COMPLETED
        assert second.message == "File already imported"
        page = await pipeline.transactions_query.execute(TransactionFilter())
        assert page.total_elements == 4

    @pytest.mark.asyncio
    async def test_concurrent_uploads_create_one_batch(self, pipeline, four_rows):
        results = await asyncio.gather(
            *(
                pipeline.import_service.import_transactions(f"{i}.csv", four_rows)
                for i in range(5)
            ),
        )
        await pipeline.wait_for_imports()

        assert len({r.import_id for r in results}) == 1
        assert sum(r.message == "Import started" for r in results) == 1
        page = await pipeline.transactions_query.execute(TransactionFilter())
        assert page.total_elements == 4

    @pytest.mark.asyncio
    async def test_cache_is_refreshed_by_new_import(self, pipeline, month):
        first = csv_content([csv_row(day=day_in(month, 1), amount="-1.00")])
        second = csv_content([csv_row(day=day_in(month, 2), amount="-2.00")])

        await pipeline.import_service.import_transactions("1.csv", first)
        await pipeline.wait_for_imports()
        before = await pipeline.statistics_service.get_statistics_by_category(month)

        await pipeline.import_service.import_transactions("2.csv", second)
        await pipeline.wait_for_imports()
        after = await pipeline.statistics_service.get_statistics_by_category(month)

        assert before.categories[0].total_amount == Decimal("-1.00")
        assert after.categories[0].total_amount == Decimal("-3.00")

    @pytest.mark.asyncio
    async def test_import_during_statistics_read_is_not_masked(self, pipeline, month):
        first = csv_content([csv_row(day=day_in(month, 1), amount="-1.00")])
        second = csv_content([csv_row(day=day_in(month, 2), amount="-2.00")])
        await pipeline.import_service.import_transactions("1.csv", first)
        await pipeline.wait_for_imports()

        queried = asyncio.Event()
        release = asyncio.Event()
        repository = pipeline.transaction_repository

        class ParkedRepository:
            async def find_by_year_month(self, year, month_number):
                rows = await repository.find_by_year_month(year, month_number)
                queried.set()
                await release.wait()
                return rows

        slow_service = StatisticsService(ParkedRepository(), pipeline.statistics_cache)
        read = asyncio.create_task(slow_service.get_statistics_by_category(month))
        await queried.wait()

        await pipeline.import_service.import_transactions("2.csv", second)
        await pipeline.wait_for_imports()
        release.set()
        stale = await read

        after = await pipeline.statistics_service.get_statistics_by_category(month)

        assert stale.categories[0].total_amount == Decimal("-1.00")
        assert after.categories[0].total_amount == Decimal("-3.00")
