"""Bounded asyncio worker pool executing import jobs.

Submission policy, in order:
1. Core workers (started lazily on first submit) consume a bounded queue;
   a job is queued if there is room.
2. If the queue is full and fewer than ``max_size`` workers are alive, an
   extra worker is spawned that runs the job directly, then keeps draining
   the queue until it has been idle for ``keep_alive_seconds``.
3. Otherwise the submitting coroutine runs the job itself (caller-runs
   backpressure). Jobs are never dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Set, Tuple
from uuid import UUID

from txaggregator.application.ports import ImportDispatcher, ImportHandler

logger = logging.getLogger(__name__)

Job = Tuple[UUID, bytes]

DEFAULT_CORE_SIZE = 4
DEFAULT_MAX_SIZE = 8
DEFAULT_QUEUE_CAPACITY = 100
DEFAULT_KEEP_ALIVE_SECONDS = 60.0


class AsyncioImportWorkerPool(ImportDispatcher):
    """ImportDispatcher backed by asyncio tasks and a bounded queue."""

    def __init__(
        self,
        core_size: int = DEFAULT_CORE_SIZE,
        max_size: int = DEFAULT_MAX_SIZE,
        queue_capacity: int = DEFAULT_QUEUE_CAPACITY,
        keep_alive_seconds: float = DEFAULT_KEEP_ALIVE_SECONDS,
    ):
        if core_size < 1:
            msg = f"core_size must be at least 1: {core_size}"
            raise ValueError(msg)
        if max_size < core_size:
            msg = f"max_size ({max_size}) must be >= core_size ({core_size})"
            raise ValueError(msg)
        if queue_capacity < 1:
            msg = f"queue_capacity must be at least 1: {queue_capacity}"
            raise ValueError(msg)

        self._core_size = core_size
        self._max_size = max_size
        self._queue_capacity = queue_capacity
        self._keep_alive = keep_alive_seconds

        self._handler: Optional[ImportHandler] = None
        self._queue: Optional[asyncio.Queue[Job]] = None
        self._core_workers: Set[asyncio.Task] = set()
        self._extra_workers: Set[asyncio.Task] = set()
        self._pending = 0
        self._idle = asyncio.Event()
        self._idle.set()
        self._closed = False

    def bind(self, handler: ImportHandler) -> None:
        """Set the coroutine function that processes one job."""
        self._handler = handler

    @property
    def worker_count(self) -> int:
        return len(self._core_workers) + len(self._extra_workers)

    @property
    def pending_count(self) -> int:
        """Jobs submitted but not yet finished (queued or running)."""
        return self._pending

    @property
    def queue_size(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    async def process_async(self, batch_id: UUID, content: bytes) -> None:
        if self._handler is None:
            msg = "No import handler bound to the worker pool"
            raise RuntimeError(msg)
        if self._closed:
            msg = "Worker pool is shut down"
            raise RuntimeError(msg)

        queue = self._ensure_core_workers()
        job: Job = (batch_id, content)
        self._job_submitted()

        try:
            queue.put_nowait(job)
            logger.debug("Queued batch %s (queue size %d)", batch_id, queue.qsize())
            return
        except asyncio.QueueFull:
            pass

        if self.worker_count < self._max_size:
            logger.debug("Queue full; spawning extra worker for batch %s", batch_id)
            self._spawn(self._extra_worker(job), self._extra_workers)
            return

        logger.warning(
            "Import pool saturated (%d workers, %d queued); "
            "running batch %s on the caller",
            self.worker_count,
            queue.qsize(),
            batch_id,
        )
        await self._run(job)

    async def join(self) -> None:
        """Wait until every submitted job has finished."""
        await self._idle.wait()

    async def shutdown(self) -> None:
        """Stop accepting jobs, drain the pending ones and stop all workers."""
        self._closed = True
        await self.join()

        workers = [*self._core_workers, *self._extra_workers]
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

        self._core_workers.clear()
        self._extra_workers.clear()
        logger.debug("Import worker pool shut down")

    def _ensure_core_workers(self) -> asyncio.Queue[Job]:
        if self._queue is None:
            self._queue = asyncio.Queue(maxsize=self._queue_capacity)

        while len(self._core_workers) < self._core_size:
            self._spawn(self._core_worker(), self._core_workers)
        return self._queue

    def _spawn(self, coro, registry: Set[asyncio.Task]) -> None:
        task = asyncio.create_task(coro)
        registry.add(task)
        task.add_done_callback(registry.discard)

    async def _core_worker(self) -> None:
        assert self._queue is not None
        while True:
            job = await self._queue.get()
            try:
                await self._run(job)
            finally:
                self._queue.task_done()

    async def _extra_worker(self, first_job: Job) -> None:
        assert self._queue is not None
        await self._run(first_job)

        while True:
            try:
                job = await asyncio.wait_for(self._queue.get(), self._keep_alive)
            except asyncio.TimeoutError:
                logger.debug("Extra import worker idle; retiring")
                return
            try:
                await self._run(job)
            finally:
                self._queue.task_done()

    async def _run(self, job: Job) -> None:
        batch_id, content = job
        logger.info("Starting async processing for batch: %s", batch_id)
        try:
            await self._handler(batch_id, content)  # type: ignore[misc]
            logger.info("Completed async processing for batch: %s", batch_id)
        except Exception as e:
            logger.exception("Async processing failed for batch %s: %s", batch_id, e)
        finally:
            self._job_finished()

    def _job_submitted(self) -> None:
        self._pending += 1
        self._idle.clear()

    def _job_finished(self) -> None:
        self._pending -= 1
        if self._pending == 0:
            self._idle.set()
