"""SQLAlchemy model for the ImportBatch aggregate."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON, CheckConstraint, DateTime, Index, Integer, String, Uuid, text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from txaggregator.domain.transactions import ImportStatus
from txaggregator.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    CreatedAtMixin,
)

IN_PROGRESS_PREDICATE = "status IN ('pending', 'processing')"
IN_PROGRESS_CHECKSUM_INDEX = "uq_import_batches_checksum_in_progress"


class ImportBatchModel(Base, CreatedAtMixin):
    """
    SQLAlchemy model for persisting ImportBatch aggregates.

    Deduplication Strategy:
    - file_checksum: SHA-256 of the uploaded bytes
    - At most one PENDING/PROCESSING batch per checksum (partial unique index),
      so two processes racing on the same upload cannot both insert

    Row errors are stored inline as a JSON list of ``{"row", "message"}``.
    """

    __tablename__ = "import_batches"

    __table_args__ = (
        CheckConstraint("total_rows >= 0", name="check_total_rows_non_negative"),
        CheckConstraint(
            "success_count >= 0 AND error_count >= 0",
            name="check_counts_non_negative",
        ),
        Index(
            IN_PROGRESS_CHECKSUM_INDEX,
            "file_checksum",
            unique=True,
            sqlite_where=text(IN_PROGRESS_PREDICATE),
            postgresql_where=text(IN_PROGRESS_PREDICATE),
        ),
        Index("ix_import_batches_checksum_status", "file_checksum", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    file_checksum: Mapped[str] = mapped_column(String(64), nullable=False)

    status: Mapped[ImportStatus] = mapped_column(
        SQLEnum(
            ImportStatus,
            values_callable=lambda x: [e.value for e in x],
            native_enum=False,
        ),
        default=ImportStatus.PENDING,
        nullable=False,
    )

    total_rows: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    success_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    error_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    errors: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<ImportBatchModel(id={self.id}, "
            f"status={self.status.value}, "
            f"filename={self.filename})>"
        )
