"""Transactions domain exceptions.

These exceptions inherit from the shared DomainException base class and are
tagged with a stable ``ErrorCode``.
"""

from uuid import UUID

from txaggregator.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
)


class InvalidStateTransitionError(BusinessRuleViolation):
    """Raised when an import batch is asked to make an illegal transition.

    This signals a broken orchestrator/worker contract and must never be
    swallowed silently.
    """

    def __init__(self, batch_id: UUID, current: str, action: str) -> None:
        super().__init__(
            message=f"Cannot {action} from status: {current}",
            code=ErrorCode.INVALID_STATE_TRANSITION,
            details={"batch_id": str(batch_id), "status": current, "action": action},
        )


class BatchNotFoundError(EntityNotFoundError):
    """Raised when a worker is handed a batch id that is not persisted."""

    def __init__(self, batch_id: UUID | str) -> None:
        super().__init__(
            message=f"Batch not found: {batch_id}",
            code=ErrorCode.BATCH_NOT_FOUND,
            details={"batch_id": str(batch_id)},
        )


class DuplicateImportError(ConflictError):
    """Raised when a second in-progress batch would exist for one checksum."""

    def __init__(self, checksum: str) -> None:
        super().__init__(
            message="An import for this file is already in progress",
            code=ErrorCode.DUPLICATE_IMPORT,
            details={"checksum": checksum},
        )
