"""Application service for importing bank-statement CSV files.

The import is split in two halves:

1. ``import_transactions`` runs on the caller's task: validate the upload,
   deduplicate by content checksum, persist a PENDING batch and hand the
   bytes to the dispatcher. It never parses rows.
2. ``process_import`` runs on a dispatcher worker: parse, store valid rows in
   chunks, record row errors and drive the batch to COMPLETED or FAILED.

Callers observe the second half only by polling ``get_status``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional, Sequence
from uuid import UUID, uuid4

from txaggregator.application.dtos import (
    CsvParseResult,
    ImportCommand,
    ImportResult,
    ImportStatusView,
    ParsedTransaction,
)
from txaggregator.domain.transactions import (
    BatchNotFoundError,
    DuplicateImportError,
    FileChecksum,
    ImportBatch,
    ImportStatus,
    Transaction,
    YearMonth,
)

if TYPE_CHECKING:
    from txaggregator.application.ports import ImportDispatcher, StatisticsCachePort
    from txaggregator.application.services.csv_parsing_service import (
        CsvParsingService,
    )
    from txaggregator.domain.transactions import (
        ImportBatchRepository,
        TransactionRepository,
    )

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 100
MAX_FAILURE_MESSAGE_LENGTH = 500


class TransactionImportService:
    """Orchestrates CSV imports from upload to terminal batch status."""

    def __init__(  # noqa: PLR0913
        self,
        import_batch_repository: ImportBatchRepository,
        transaction_repository: TransactionRepository,
        csv_parsing_service: CsvParsingService,
        statistics_cache: StatisticsCachePort,
        dispatcher: ImportDispatcher,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if chunk_size < 1:
            msg = f"Chunk size must be positive: {chunk_size}"
            raise ValueError(msg)

        self._batch_repo = import_batch_repository
        self._transaction_repo = transaction_repository
        self._parser = csv_parsing_service
        self._cache = statistics_cache
        self._dispatcher = dispatcher
        self._chunk_size = chunk_size
        self._submit_lock = asyncio.Lock()

    async def import_transactions(self, filename: str, content: bytes) -> ImportResult:
        """
        Accept an uploaded file for asynchronous import.

        Parameters
        ----------
        filename
            Original name of the uploaded file (informational only)
        content
            Raw file bytes

        Returns
        -------
        ImportResult describing a new, duplicate or in-flight import

        Raises
        ------
        ValidationError
            If the filename is blank or the content is empty
        """
        return await self.submit(ImportCommand(filename=filename, content=content))

    async def submit(self, command: ImportCommand) -> ImportResult:
        checksum = FileChecksum.of(command.content)

        async with self._submit_lock:
            existing = await self._check_for_duplicate(checksum)
            if existing is not None:
                logger.info(
                    "Skipping upload %s: %s (batch %s)",
                    command.filename,
                    existing.message,
                    existing.import_id,
                )
                return existing

            batch = ImportBatch.create(uuid4(), command.filename, checksum)
            try:
                await self._batch_repo.save(batch)
            except DuplicateImportError:
                # Another process inserted the same file in the meantime
                existing = await self._check_for_duplicate(checksum)
                if existing is None:
                    raise
                return existing

        logger.info("Created import batch %s for %s", batch.id, command.filename)
        try:
            await self._dispatcher.process_async(batch.id, command.content)
        except Exception as e:
            logger.exception("Could not dispatch batch %s: %s", batch.id, e)
            batch.fail(f"Dispatch failed: {_describe(e)}")
            await self._batch_repo.save(batch)
            raise
        return ImportResult.started(batch.id)

    async def get_status(self, import_id: UUID | str) -> Optional[ImportStatusView]:
        """Return the current view of a batch, or None if it is unknown."""
        batch_id = _to_uuid(import_id)
        if batch_id is None:
            return None

        batch = await self._batch_repo.find_by_id(batch_id)
        if batch is None:
            return None
        return ImportStatusView.from_batch(batch)

    async def process_import(self, batch_id: UUID, content: bytes) -> None:
        """
        Process a persisted PENDING batch to a terminal status.

        Any unexpected failure after the batch was loaded turns it FAILED;
        rows already stored by earlier chunks are kept.

        Raises
        ------
        BatchNotFoundError
            If no batch with this id is persisted
        """
        batch = await self._batch_repo.find_by_id(batch_id)
        if batch is None:
            raise BatchNotFoundError(batch_id)

        try:
            parse_result = await asyncio.to_thread(self._parser.parse, content)
            affected_months = await self._process_parse_result(batch, parse_result)
        except Exception as e:
            await self._handle_processing_failure(batch, e)
            return

        await self._evict_statistics(batch, affected_months)

    async def _check_for_duplicate(
        self,
        checksum: FileChecksum,
    ) -> Optional[ImportResult]:
        completed = await self._find_completed(checksum)
        if completed is not None:
            return ImportResult.duplicate(completed.id)

        in_flight = await self._find_in_flight(checksum)
        if in_flight is not None:
            return ImportResult.in_progress(in_flight.id)

        # The in-flight batch may have completed between the two lookups
        completed = await self._find_completed(checksum)
        if completed is not None:
            return ImportResult.duplicate(completed.id)

        return None

    async def _find_completed(self, checksum: FileChecksum) -> Optional[ImportBatch]:
        if not await self._batch_repo.exists_by_checksum_and_status_in(
            checksum,
            ImportStatus.COMPLETED,
        ):
            return None
        return await self._batch_repo.find_by_checksum_and_status(
            checksum,
            ImportStatus.COMPLETED,
        )

    async def _find_in_flight(self, checksum: FileChecksum) -> Optional[ImportBatch]:
        if not await self._batch_repo.exists_by_checksum_and_status_in(
            checksum,
            ImportStatus.PROCESSING,
            ImportStatus.PENDING,
        ):
            return None

        for status in (ImportStatus.PROCESSING, ImportStatus.PENDING):
            in_flight = await self._batch_repo.find_by_checksum_and_status(
                checksum,
                status,
            )
            if in_flight is not None:
                return in_flight
        return None

    async def _process_parse_result(
        self,
        batch: ImportBatch,
        parse_result: CsvParseResult,
    ) -> set[YearMonth]:
        batch.start_processing(parse_result.total_rows_processed)
        await self._batch_repo.save(batch)

        transactions = _to_transactions(parse_result.valid_transactions, batch.id)
        affected_months = {tx.year_month for tx in transactions}

        await self._save_in_chunks(batch, transactions)

        for error in parse_result.errors:
            batch.record_error(error.row_number, error.message)

        batch.complete()
        await self._batch_repo.save(batch)

        logger.info(
            "Import batch %s completed: %d rows, %d stored, %d errors",
            batch.id,
            batch.total_rows,
            batch.success_count,
            batch.error_count,
        )
        return affected_months

    async def _save_in_chunks(
        self,
        batch: ImportBatch,
        transactions: Sequence[Transaction],
    ) -> None:
        for start in range(0, len(transactions), self._chunk_size):
            chunk = transactions[start : start + self._chunk_size]
            await self._transaction_repo.save_all(chunk)

            for _ in chunk:
                batch.record_success()
            await self._batch_repo.save(batch)

            logger.debug(
                "Batch %s: stored %d/%d transactions",
                batch.id,
                batch.success_count,
                len(transactions),
            )

    async def _evict_statistics(
        self,
        batch: ImportBatch,
        affected_months: set[YearMonth],
    ) -> None:
        if not affected_months:
            return
        try:
            await self._cache.evict_statistics_cache(affected_months)
        except Exception as e:
            logger.exception(
                "Cache eviction failed after completing batch %s: %s",
                batch.id,
                e,
            )

    async def _handle_processing_failure(
        self,
        batch: ImportBatch,
        error: Exception,
    ) -> None:
        logger.exception("Import failed for batch %s: %s", batch.id, error)

        if batch.is_terminal():
            logger.error(
                "Batch %s is already %s; leaving stored state unchanged",
                batch.id,
                batch.status.value,
            )
            return

        batch.fail(f"Processing failed: {_describe(error)}")
        await self._batch_repo.save(batch)


def _to_transactions(
    parsed: Sequence[ParsedTransaction],
    batch_id: UUID,
) -> list[Transaction]:
    return [
        Transaction.create(
            iban=row.iban,
            transaction_date=row.date,
            currency=row.currency,
            category=row.category,
            amount=row.amount,
            import_batch_id=batch_id,
        )
        for row in parsed
    ]


def _describe(error: Exception) -> str:
    text = str(error).strip() or type(error).__name__
    return text[:MAX_FAILURE_MESSAGE_LENGTH]


def _to_uuid(value: UUID | str | None) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    if not value:
        return None
    try:
        return UUID(str(value).strip())
    except ValueError:
        return None
