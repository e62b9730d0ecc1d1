"""Import batch aggregate tracking one CSV import end-to-end."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from txaggregator.domain.shared.exceptions import ErrorCode, ValidationError
from txaggregator.domain.shared.time import utc_now
from txaggregator.domain.transactions.exceptions import InvalidStateTransitionError
from txaggregator.domain.transactions.value_objects import FileChecksum, ImportStatus


@dataclass(frozen=True)
class ImportError:  # noqa: A001
    """A validation failure scoped to one CSV row (row 0 = whole file)."""

    row_number: int
    message: str

    def __post_init__(self) -> None:
        if not self.message or not self.message.strip():
            msg = "Error message cannot be null or blank"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)
        if self.row_number < 0:
            msg = f"Row number cannot be negative: {self.row_number}"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)


class ImportBatch:
    """
    Aggregate root for one import attempt of one uploaded file.

    Lifecycle:
    - Created PENDING when an upload is accepted
    - Moved to PROCESSING by the worker once the row count is known
    - Ends COMPLETED or FAILED (terminal, never left again)

    The only mutators are the named transitions and the two record methods.
    Use ``create`` for new imports and ``reconstitute`` when loading from
    storage. Batches are never deleted; they are the audit trail.
    """

    def __init__(
        self,
        id: UUID,
        filename: str,
        file_checksum: FileChecksum,
        created_at: Optional[datetime] = None,
    ):
        if not id:
            msg = "Batch ID cannot be null or blank"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)
        if not filename or not filename.strip():
            msg = "Filename cannot be null or blank"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)
        if file_checksum is None:
            msg = "File checksum cannot be null"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)

        self._id = id
        self._filename = filename
        self._file_checksum = file_checksum
        self._created_at = created_at or utc_now()

        self._status = ImportStatus.PENDING
        self._total_rows = 0
        self._success_count = 0
        self._error_count = 0
        self._errors: list[ImportError] = []
        self._completed_at: Optional[datetime] = None

    @classmethod
    def create(cls, id: UUID, filename: str, file_checksum: FileChecksum) -> ImportBatch:
        return cls(id=id, filename=filename, file_checksum=file_checksum)

    @classmethod
    def reconstitute(  # noqa: PLR0913
        cls,
        id: UUID,
        filename: str,
        file_checksum: FileChecksum,
        status: ImportStatus,
        total_rows: int,
        success_count: int,
        error_count: int,
        errors: Iterable[ImportError] | None,
        created_at: datetime,
        completed_at: Optional[datetime],
    ) -> ImportBatch:
        batch = cls(
            id=id,
            filename=filename,
            file_checksum=file_checksum,
            created_at=created_at,
        )
        batch._status = status
        batch._total_rows = total_rows
        batch._success_count = success_count
        batch._error_count = error_count
        batch._errors.extend(errors or [])
        batch._completed_at = completed_at
        return batch

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def file_checksum(self) -> FileChecksum:
        return self._file_checksum

    @property
    def status(self) -> ImportStatus:
        return self._status

    @property
    def total_rows(self) -> int:
        return self._total_rows

    @property
    def success_count(self) -> int:
        return self._success_count

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def errors(self) -> tuple[ImportError, ...]:
        return tuple(self._errors)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def completed_at(self) -> Optional[datetime]:
        return self._completed_at

    def start_processing(self, total_rows: int) -> None:
        self._ensure_can_transition(ImportStatus.PROCESSING, "start processing")
        if total_rows < 0:
            msg = f"Total rows cannot be negative: {total_rows}"
            raise ValidationError(msg, code=ErrorCode.INVALID_INPUT)

        self._status = ImportStatus.PROCESSING
        self._total_rows = total_rows

    def record_success(self) -> None:
        self._ensure_processing("record success")
        self._success_count += 1

    def record_error(self, row_number: int, message: str) -> None:
        self._ensure_processing("record error")
        self._errors.append(ImportError(row_number, message))
        self._error_count += 1

    def complete(self) -> None:
        self._ensure_can_transition(ImportStatus.COMPLETED, "complete")
        self._status = ImportStatus.COMPLETED
        self._completed_at = utc_now()

    def fail(self, reason: str | None) -> None:
        self._ensure_can_transition(ImportStatus.FAILED, "fail")
        self._status = ImportStatus.FAILED
        self._completed_at = utc_now()

        if reason and reason.strip():
            self._errors.append(ImportError(0, reason.strip()))

    def is_completed(self) -> bool:
        return self._status == ImportStatus.COMPLETED

    def is_failed(self) -> bool:
        return self._status == ImportStatus.FAILED

    def is_terminal(self) -> bool:
        return self._status.is_terminal()

    def _ensure_can_transition(self, target: ImportStatus, action: str) -> None:
        if not self._status.can_transition_to(target):
            raise InvalidStateTransitionError(self._id, self._status.value, action)

    def _ensure_processing(self, action: str) -> None:
        if self._status != ImportStatus.PROCESSING:
            raise InvalidStateTransitionError(self._id, self._status.value, action)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImportBatch):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        return (
            f"ImportBatch[{self._status.value}]: {self._filename} "
            f"({self._success_count} ok, {self._error_count} errors)"
        )
