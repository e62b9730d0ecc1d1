"""Import status enumeration."""

from enum import Enum


class ImportStatus(Enum):
    """Lifecycle status of an import batch.

    PENDING -> PROCESSING -> COMPLETED
    PENDING -> FAILED
    PROCESSING -> FAILED

    COMPLETED and FAILED are terminal.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def is_terminal(self) -> bool:
        return self in [
            ImportStatus.COMPLETED,
            ImportStatus.FAILED,
        ]

    def is_in_progress(self) -> bool:
        return self in [
            ImportStatus.PENDING,
            ImportStatus.PROCESSING,
        ]

    def can_transition_to(self, target: "ImportStatus") -> bool:
        return target in _TRANSITIONS[self]


_DESCRIPTIONS = {
    ImportStatus.PENDING: "Import is queued",
    ImportStatus.PROCESSING: "Import is in progress",
    ImportStatus.COMPLETED: "Import completed successfully",
    ImportStatus.FAILED: "Import failed",
}

_TRANSITIONS = {
    ImportStatus.PENDING: frozenset({ImportStatus.PROCESSING, ImportStatus.FAILED}),
    ImportStatus.PROCESSING: frozenset({ImportStatus.COMPLETED, ImportStatus.FAILED}),
    ImportStatus.COMPLETED: frozenset(),
    ImportStatus.FAILED: frozenset(),
}
