"""Deletion execution with dry-run support and bulkhead batching.

The executor removes (or, in dry-run, pretends to remove) validated
candidates, and schedules per-candidate work either sequentially or in
fixed-size concurrent batches.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import aiofiles.os

from dotsweep.core.context import RunContext
from dotsweep.models.candidate import CandidateFile, CandidateStatus
from dotsweep.models.metrics import ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DeletionExecutor:
    """Removes candidates and schedules per-candidate work.

    Attributes:
        _dry_run: If True, simulate deletions without modifying the filesystem.
        _parallel: If True, run work in concurrent batches.
        _limit: Batch size for concurrent work.
    """

    def __init__(
        self,
        dry_run: bool = False,
        parallel: bool = False,
        parallel_limit: int = 5,
    ) -> None:
        if parallel_limit < 1:
            msg = f"parallel_limit must be at least 1, got {parallel_limit}"
            raise ValueError(msg)
        self._dry_run = dry_run
        self._parallel = parallel
        self._limit = parallel_limit

    @classmethod
    def for_context(cls, ctx: RunContext) -> "DeletionExecutor":
        """Build an executor from a run's configuration."""
        return cls(
            dry_run=ctx.config.dry_run,
            parallel=ctx.config.enable_parallel,
            parallel_limit=ctx.config.parallel_limit,
        )

    @property
    def dry_run(self) -> bool:
        """Check if executor is in dry-run mode."""
        return self._dry_run

    async def delete(self, ctx: RunContext, candidate: CandidateFile) -> None:
        """Delete one candidate and update the run counters.

        A failure is recorded as a DeleteFailure on the run and never
        raised, so the rest of the batch proceeds.
        """
        path = str(candidate.path)

        if self._dry_run:
            candidate.status = CandidateStatus.WOULD_DELETE
            ctx.metrics.files_deleted += 1
            ctx.metrics.bytes_processed += candidate.size or 0
            ctx.info("Would delete", path=path, size=candidate.size)
            return

        try:
            await aiofiles.os.remove(candidate.path)
        except OSError as e:
            candidate.status = CandidateStatus.FAILED
            candidate.error = str(e)
            ctx.fail(ErrorKind.DELETE, str(e), path)
            return

        candidate.status = CandidateStatus.DELETED
        ctx.metrics.files_deleted += 1
        ctx.metrics.bytes_processed += candidate.size or 0
        ctx.info("Deleted", path=path, size=candidate.size, digest=candidate.digest)

    async def run(self, items: Sequence[T], worker: Callable[[T], Awaitable[None]]) -> int:
        """Process items sequentially or in bulkhead batches.

        In parallel mode with more than one item, each batch of up to
        ``parallel_limit`` items is issued concurrently, and the next
        batch starts only once the whole batch has settled. Otherwise
        items run one at a time in order.

        Args:
            items: Work items in discovery order.
            worker: Coroutine function handling a single item.

        Returns:
            Number of items that were processed inside concurrent batches.
        """
        if not self._parallel or len(items) <= 1:
            for item in items:
                await worker(item)
            return 0

        concurrent = 0
        for start in range(0, len(items), self._limit):
            batch = items[start : start + self._limit]
            logger.debug("Issuing batch of %d starting at %d", len(batch), start)
            results = await asyncio.gather(
                *(worker(item) for item in batch), return_exceptions=True
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            concurrent += len(batch)
        return concurrent
