"""Import dispatcher port.

Hands an accepted upload over to asynchronous processing so the caller that
created the PENDING batch can return immediately.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable
from uuid import UUID

ImportHandler = Callable[[UUID, bytes], Awaitable[None]]


class ImportDispatcher(ABC):
    """Port for fire-and-forget dispatch of import work."""

    @abstractmethod
    async def process_async(self, batch_id: UUID, content: bytes) -> None:
        """
        Schedule processing of a persisted PENDING batch.

        Returns as soon as the work is queued. Implementations never drop
        work; under saturation they may run it on the calling task instead.

        Parameters
        ----------
        batch_id
            ID of the PENDING batch to process
        content
            Raw bytes of the uploaded file
        """
