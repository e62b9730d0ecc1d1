"""DTOs for the import use case."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError
from txaggregator.domain.transactions import ImportBatch, ImportStatus

MSG_IMPORT_STARTED = "Import started"
MSG_ALREADY_IMPORTED = "File already imported"
MSG_IN_PROGRESS = "Import already in progress"


@dataclass(frozen=True)
class ImportCommand:
    """An uploaded file handed to the import use case."""

    filename: str
    content: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not self.filename or not self.filename.strip():
            msg = "Filename cannot be null or blank"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)
        if not self.content:
            msg = "Content cannot be null or empty"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)


@dataclass(frozen=True)
class ImportResult:
    """Synchronous answer of an import request.

    ``status`` is what the caller should expect to observe when polling:
    PROCESSING for new and in-flight imports, COMPLETED for duplicates.
    """

    import_id: UUID
    status: ImportStatus
    message: str

    @classmethod
    def started(cls, import_id: UUID) -> ImportResult:
        return cls(import_id, ImportStatus.PROCESSING, MSG_IMPORT_STARTED)

    @classmethod
    def duplicate(cls, existing_import_id: UUID) -> ImportResult:
        return cls(existing_import_id, ImportStatus.COMPLETED, MSG_ALREADY_IMPORTED)

    @classmethod
    def in_progress(cls, existing_import_id: UUID) -> ImportResult:
        return cls(existing_import_id, ImportStatus.PROCESSING, MSG_IN_PROGRESS)

    def to_dict(self) -> dict:
        return {
            "import_id": str(self.import_id),
            "status": self.status.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class ErrorDetail:
    row: int
    message: str


@dataclass(frozen=True)
class ImportStatusView:
    """Read model of an import batch, as returned to pollers."""

    import_id: UUID
    status: ImportStatus
    filename: str
    total_rows: int
    success_count: int
    error_count: int
    errors: tuple[ErrorDetail, ...]
    created_at: datetime
    completed_at: Optional[datetime]

    @classmethod
    def from_batch(cls, batch: ImportBatch) -> ImportStatusView:
        return cls(
            import_id=batch.id,
            status=batch.status,
            filename=batch.filename,
            total_rows=batch.total_rows,
            success_count=batch.success_count,
            error_count=batch.error_count,
            errors=tuple(
                ErrorDetail(row=error.row_number, message=error.message)
                for error in batch.errors
            ),
            created_at=batch.created_at,
            completed_at=batch.completed_at,
        )

    def to_dict(self) -> dict:
        return {
            "import_id": str(self.import_id),
            "status": self.status.value,
            "filename": self.filename,
            "total_rows": self.total_rows,
            "success_count": self.success_count,
            "error_count": self.error_count,
            "errors": [{"row": e.row, "message": e.message} for e in self.errors],
            "created_at": self.created_at.isoformat(),
            "completed_at": (
                self.completed_at.isoformat() if self.completed_at else None
            ),
        }
