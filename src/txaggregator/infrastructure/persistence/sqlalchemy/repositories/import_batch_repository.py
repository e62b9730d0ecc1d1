"""SQLAlchemy implementation of ImportBatchRepository."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from txaggregator.domain.shared.time import as_utc
from txaggregator.domain.transactions import (
    DuplicateImportError,
    FileChecksum,
    ImportBatch,
    ImportBatchRepository,
    ImportError,
    ImportStatus,
)
from txaggregator.infrastructure.persistence.sqlalchemy.models import (
    IN_PROGRESS_CHECKSUM_INDEX,
    ImportBatchModel,
)


class ImportBatchRepositorySQLAlchemy(ImportBatchRepository):
    """SQLAlchemy implementation of ImportBatchRepository.

    Every call runs in its own session and commits before returning, so
    concurrent import workers never share a session and every status change
    is durable once ``save`` returns.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def save(self, batch: ImportBatch) -> None:
        inserting = False
        try:
            async with self._session_maker.begin() as session:
                existing = await session.get(ImportBatchModel, batch.id)

                if existing:
                    existing.status = batch.status
                    existing.total_rows = batch.total_rows
                    existing.success_count = batch.success_count
                    existing.error_count = batch.error_count
                    existing.errors = _errors_to_json(batch)
                    existing.completed_at = batch.completed_at
                else:
                    inserting = True
                    model = ImportBatchModel(
                        id=batch.id,
                        filename=batch.filename,
                        file_checksum=batch.file_checksum.value,
                        status=batch.status,
                        total_rows=batch.total_rows,
                        success_count=batch.success_count,
                        error_count=batch.error_count,
                        errors=_errors_to_json(batch),
                        created_at=batch.created_at,
                        completed_at=batch.completed_at,
                    )
                    session.add(model)
        except IntegrityError as e:
            if inserting and _is_in_progress_conflict(e):
                raise DuplicateImportError(batch.file_checksum.value) from e
            raise

    async def find_by_id(self, batch_id: UUID) -> Optional[ImportBatch]:
        async with self._session_maker() as session:
            model = await session.get(ImportBatchModel, batch_id)

        if not model:
            return None

        return self._model_to_domain(model)

    async def find_by_checksum_and_status(
        self,
        checksum: FileChecksum,
        status: ImportStatus,
    ) -> Optional[ImportBatch]:
        stmt = (
            select(ImportBatchModel)
            .where(
                ImportBatchModel.file_checksum == checksum.value,
                ImportBatchModel.status == status,
            )
            .order_by(ImportBatchModel.created_at.desc())
            .limit(1)
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def exists_by_checksum_and_status_in(
        self,
        checksum: FileChecksum,
        *statuses: ImportStatus,
    ) -> bool:
        if not statuses:
            return False

        stmt = select(func.count(ImportBatchModel.id)).where(
            ImportBatchModel.file_checksum == checksum.value,
            ImportBatchModel.status.in_(statuses),
        )
        async with self._session_maker() as session:
            result = await session.execute(stmt)
            count = result.scalar_one()

        return count > 0

    def _model_to_domain(self, model: ImportBatchModel) -> ImportBatch:
        return ImportBatch.reconstitute(
            id=model.id,
            filename=model.filename,
            file_checksum=FileChecksum(model.file_checksum),
            status=model.status,
            total_rows=model.total_rows,
            success_count=model.success_count,
            error_count=model.error_count,
            errors=[
                ImportError(row_number=item["row"], message=item["message"])
                for item in model.errors or []
            ],
            created_at=as_utc(model.created_at),
            completed_at=(
                as_utc(model.completed_at) if model.completed_at else None
            ),
        )


def _errors_to_json(batch: ImportBatch) -> list[dict]:
    return [{"row": e.row_number, "message": e.message} for e in batch.errors]


def _is_in_progress_conflict(error: IntegrityError) -> bool:
    # PostgreSQL reports the index name, SQLite the indexed column
    detail = str(error.orig)
    return (
        IN_PROGRESS_CHECKSUM_INDEX in detail
        or "import_batches.file_checksum" in detail
    )
