"""Repository interface for import batches."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from txaggregator.domain.transactions.aggregates import ImportBatch
from txaggregator.domain.transactions.value_objects import FileChecksum, ImportStatus


class ImportBatchRepository(ABC):
    """Repository interface for persisting and retrieving import batches."""

    @abstractmethod
    async def save(self, batch: ImportBatch) -> None:
        """
        Insert or update an import batch, including its recorded errors.

        Parameters
        ----------
        batch
            Import batch to save

        Raises
        ------
        DuplicateImportError
            If another PENDING or PROCESSING batch already exists for the
            same file checksum
        """

    @abstractmethod
    async def find_by_id(self, batch_id: UUID) -> Optional[ImportBatch]:
        """
        Find an import batch by ID.

        Parameters
        ----------
        batch_id
            Batch ID to search for

        Returns
        -------
        Import batch if found, None otherwise
        """

    @abstractmethod
    async def find_by_checksum_and_status(
        self,
        checksum: FileChecksum,
        status: ImportStatus,
    ) -> Optional[ImportBatch]:
        """
        Find a batch for a file checksum in a given status.

        This is the primary method for duplicate detection. When several
        batches match (only possible for terminal statuses) the most recent
        one is returned.

        Parameters
        ----------
        checksum
            SHA-256 checksum of the uploaded file
        status
            Status to filter by

        Returns
        -------
        Import batch if found, None otherwise
        """

    @abstractmethod
    async def exists_by_checksum_and_status_in(
        self,
        checksum: FileChecksum,
        *statuses: ImportStatus,
    ) -> bool:
        """
        Check whether any batch for the checksum has one of the statuses.

        Parameters
        ----------
        checksum
            SHA-256 checksum of the uploaded file
        statuses
            Statuses to match

        Returns
        -------
        True if at least one batch matches
        """
