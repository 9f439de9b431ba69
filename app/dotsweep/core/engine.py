"""Cleanup run orchestration.

The engine composes discovery, per-candidate processing, analysis and
final validation into one run:

    INIT -> SCANNING -> per candidate {VALIDATING -> SKIPPED |
    HASHING -> BACKING-UP -> DELETING -> DONE | FAILED | RETAINED}
    -> PATTERN-ANALYSIS -> FINAL-VALIDATION -> REPORT

Each run gets a fresh :class:`RunContext`; the engine itself holds only
collaborators, so one engine can serve many runs.
"""

import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from dotsweep.core.config import RunConfig
from dotsweep.core.context import RunContext
from dotsweep.core.errors import DiscoveryError, RunAborted
from dotsweep.models.candidate import CandidateFile, CandidateStatus
from dotsweep.models.metrics import ErrorKind, RunMetrics, RunStatus
from dotsweep.pipeline.analyzer import analyze_candidates
from dotsweep.pipeline.backup import backup_candidate
from dotsweep.pipeline.executor import DeletionExecutor
from dotsweep.pipeline.final import final_validation
from dotsweep.pipeline.hasher import hash_candidate
from dotsweep.pipeline.validator import validate_candidate
from dotsweep.scanners import default_scanners
from dotsweep.scanners.base import Scanner
from dotsweep.trends.base import NullTrendCollector, TrendCollector

logger = logging.getLogger(__name__)


class CleanupEngine:
    """Runs cleanups against a base configuration.

    Args:
        config: Defaults for every run; overridable per call.
        scanners: Discovery strategies in the order they run.
            Defaults to find followed by the native walk.
        trends: Historical trend collaborator. Defaults to a collector
            that keeps nothing.
    """

    def __init__(
        self,
        config: RunConfig | None = None,
        *,
        scanners: Sequence[Scanner] | None = None,
        trends: TrendCollector | None = None,
    ) -> None:
        self._config = config or RunConfig()
        self._scanners = list(scanners) if scanners is not None else default_scanners()
        self._trends = trends or NullTrendCollector()

    @property
    def config(self) -> RunConfig:
        """Base configuration for runs."""
        return self._config

    async def run(self, **overrides: Any) -> RunMetrics:
        """Execute one cleanup run.

        Args:
            **overrides: RunConfig fields replacing the base configuration
                for this run only.

        Returns:
            Finalized metrics of the run.

        Raises:
            ConfigError: If an override is invalid.
            RunAborted: If the run failed and ``exit_on_failure`` is set.
        """
        config = self._config.with_overrides(**overrides)
        ctx = RunContext.create(config)
        if config.dry_run:
            method = "dry-run"
        else:
            method = "parallel" if config.enable_parallel else "sequential"
        operation_id = self._start_operation(method)

        ctx.info(
            "Cleanup run started",
            target=str(config.target_dir),
            pattern=config.file_pattern,
            method=method,
        )

        try:
            await self._discover_and_process(ctx)
            self._analyze(ctx)
            await final_validation(ctx, self._scanners)
        except Exception as e:
            logger.exception("Cleanup run aborted by unexpected error")
            ctx.fail(ErrorKind.FATAL, f"{type(e).__name__}: {e}")

        status = ctx.metrics.finish()
        self._complete_operation(ctx, operation_id, status)
        ctx.info(
            "Cleanup run finished",
            status=status.value,
            found=ctx.metrics.files_found,
            deleted=ctx.metrics.files_deleted,
            skipped=ctx.metrics.files_skipped,
            errors=len(ctx.metrics.errors),
        )

        if status == RunStatus.FAILED and config.exit_on_failure:
            raise RunAborted(ctx.metrics)
        return ctx.metrics

    def run_sync(self, **overrides: Any) -> RunMetrics:
        """Execute one run from synchronous code."""
        return asyncio.run(self.run(**overrides))

    async def discover(self, config: RunConfig | None = None) -> list[CandidateFile]:
        """Run every available strategy and return deduplicated candidates.

        Discovery only; nothing is validated or deleted.
        """
        ctx = RunContext.create((config or self._config).with_overrides(enable_audit_log=False))
        for scanner in self._scanners:
            for path in await self._scan(ctx, scanner):
                ctx.candidates.append(CandidateFile(path=path, strategy=scanner.name))
        return ctx.candidates

    async def _discover_and_process(self, ctx: RunContext) -> None:
        executor = DeletionExecutor.for_context(ctx)

        async def process(candidate: CandidateFile) -> None:
            await self._process_candidate(ctx, executor, candidate)

        for scanner in self._scanners:
            admitted = await self._scan(ctx, scanner)
            if not admitted:
                continue
            batch = [CandidateFile(path=path, strategy=scanner.name) for path in admitted]
            ctx.candidates.extend(batch)
            ctx.metrics.parallel_operations += await executor.run(batch, process)

    async def _scan(self, ctx: RunContext, scanner: Scanner) -> list[Path]:
        """Run one strategy and admit its new paths into the seen set."""
        if not scanner.is_available():
            ctx.info("Discovery strategy unavailable", strategy=scanner.name)
            ctx.metrics.count_found(scanner.name, 0)
            return []

        try:
            paths = await scanner.scan(ctx.config)
        except (DiscoveryError, OSError) as e:
            ctx.fail(ErrorKind.DISCOVERY, str(e))
            ctx.metrics.count_found(scanner.name, 0)
            return []

        admitted = ctx.seen.admit(paths)
        ctx.metrics.count_found(scanner.name, len(admitted))
        ctx.info(
            "Discovery strategy finished",
            strategy=scanner.name,
            reported=len(paths),
            new=len(admitted),
        )
        return admitted

    async def _process_candidate(
        self,
        ctx: RunContext,
        executor: DeletionExecutor,
        candidate: CandidateFile,
    ) -> None:
        if not await validate_candidate(ctx, candidate):
            return

        if ctx.config.enable_hashing:
            await hash_candidate(ctx, candidate)

        if ctx.config.backup_before_delete and not await backup_candidate(ctx, candidate):
            candidate.status = CandidateStatus.RETAINED
            ctx.metrics.files_retained += 1
            ctx.warn("Original retained, no usable backup", path=str(candidate.path))
            return

        await executor.delete(ctx, candidate)

    def _analyze(self, ctx: RunContext) -> None:
        file_metrics = analyze_candidates(ctx)

        try:
            for item in file_metrics:
                self._trends.record_file_metrics(item)
            analysis = self._trends.analyze_patterns()
        except Exception as e:
            logger.warning("Trend analysis failed: %s", e)
            return

        ctx.metrics.trends = analysis.summary
        ctx.metrics.recommendations = list(analysis.recommendations)

    def _start_operation(self, method: str) -> str | None:
        try:
            return self._trends.start_operation("cleanup", method)
        except Exception as e:
            logger.warning("Trend collector rejected operation start: %s", e)
            return None

    def _complete_operation(
        self, ctx: RunContext, operation_id: str | None, status: RunStatus
    ) -> None:
        if operation_id is None:
            return
        try:
            self._trends.complete_operation(
                operation_id,
                success=status != RunStatus.FAILED,
                errors=[str(error) for error in ctx.metrics.errors],
            )
            self._trends.save_metrics()
        except Exception as e:
            logger.warning("Could not store run in trend history: %s", e)


def run_cleanup(
    config: RunConfig | None = None,
    *,
    trends: TrendCollector | None = None,
    **overrides: Any,
) -> RunMetrics:
    """Run a cleanup with the default strategies.

    Convenience wrapper around :class:`CleanupEngine` for synchronous callers.
    """
    return CleanupEngine(config, trends=trends).run_sync(**overrides)
