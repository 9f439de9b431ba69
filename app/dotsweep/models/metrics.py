"""Run metrics model.

This module defines the aggregate counters, error list and analytics
collected during one cleanup run, and the terminal run status derived
from them.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from dotsweep.models.candidate import PatternCategory, RiskLevel
from dotsweep.models.trend import TrendSummary


class RunStatus(str, Enum):
    """Terminal status of a run.

    Attributes:
        SUCCESS: No errors and nothing unexpected left behind.
        PARTIAL: Errors occurred but final validation passed or was skipped.
        FAILED: Final validation failed or a fatal exception escaped a stage.
    """

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Classification of errors recorded during a run."""

    DISCOVERY = "DiscoveryFailure"
    HASH = "HashFailure"
    BACKUP = "BackupFailure"
    BACKUP_INTEGRITY = "BackupIntegrityFailure"
    DELETE = "DeleteFailure"
    FINAL_VALIDATION = "FinalValidationFailure"
    FATAL = "FatalRunException"

    @property
    def fatal(self) -> bool:
        """Whether this kind of error fails the whole run."""
        return self in (ErrorKind.FINAL_VALIDATION, ErrorKind.FATAL)


@dataclass(frozen=True, slots=True)
class RunError:
    """A single error surfaced in the run report.

    Attributes:
        kind: Error classification.
        message: Human-readable description.
        path: Affected file, if the error is file-scoped.
    """

    kind: ErrorKind
    message: str
    path: str | None = None

    def __str__(self) -> str:
        if self.path:
            return f"[{self.kind.value}] {self.path}: {self.message}"
        return f"[{self.kind.value}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"kind": self.kind.value, "message": self.message, "path": self.path}


@dataclass(slots=True)
class RiskHistogram:
    """Count of risk-scored files per risk bucket."""

    low: int = 0
    medium: int = 0
    high: int = 0

    def add(self, score: int) -> RiskLevel:
        """Count a score in its bucket and return the bucket."""
        level = RiskLevel.from_score(score)
        if level == RiskLevel.HIGH:
            self.high += 1
        elif level == RiskLevel.MEDIUM:
            self.medium += 1
        else:
            self.low += 1
        return level

    @property
    def total(self) -> int:
        """Number of risk-scored files."""
        return self.low + self.medium + self.high

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {"low": self.low, "medium": self.medium, "high": self.high}


@dataclass(slots=True)
class RunMetrics:
    """Counters and analytics for one run.

    Created zeroed at run start and mutated by every stage. The run is
    finalized when :meth:`finish` sets ``end_time`` and ``status``.
    """

    dry_run: bool = False
    files_found: int = 0
    files_deleted: int = 0
    files_backed_up: int = 0
    files_skipped: int = 0
    files_retained: int = 0
    bytes_processed: int = 0
    hashes_generated: int = 0
    parallel_operations: int = 0
    audit_entries: int = 0
    strategy_counts: dict[str, int] = field(default_factory=lambda: {})
    errors: list[RunError] = field(default_factory=lambda: [])
    patterns: set[PatternCategory] = field(default_factory=lambda: set())
    risk_assessment: RiskHistogram = field(default_factory=RiskHistogram)
    trends: TrendSummary = field(default_factory=TrendSummary)
    recommendations: list[str] = field(default_factory=lambda: [])
    remaining_artifacts: list[str] = field(default_factory=lambda: [])
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
    status: RunStatus | None = None

    def add_error(self, kind: ErrorKind, message: str, path: str | None = None) -> RunError:
        """Append an error to the run's error list."""
        error = RunError(kind=kind, message=message, path=path)
        self.errors.append(error)
        return error

    def count_found(self, strategy: str, count: int) -> None:
        """Add newly admitted files for a discovery strategy."""
        self.files_found += count
        self.strategy_counts[strategy] = self.strategy_counts.get(strategy, 0) + count

    @property
    def duration_seconds(self) -> float | None:
        """Wall-clock duration, None until the run is finished."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def resolve_status(self) -> RunStatus:
        """Derive the terminal status from the recorded errors."""
        if any(error.kind.fatal for error in self.errors):
            return RunStatus.FAILED
        if self.errors:
            return RunStatus.PARTIAL
        return RunStatus.SUCCESS

    def finish(self) -> RunStatus:
        """Set the end time and final status."""
        self.end_time = datetime.now(UTC)
        self.status = self.resolve_status()
        return self.status

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "status": self.status.value if self.status else None,
            "dry_run": self.dry_run,
            "files_found": self.files_found,
            "files_deleted": self.files_deleted,
            "files_backed_up": self.files_backed_up,
            "files_skipped": self.files_skipped,
            "files_retained": self.files_retained,
            "bytes_processed": self.bytes_processed,
            "hashes_generated": self.hashes_generated,
            "parallel_operations": self.parallel_operations,
            "audit_entries": self.audit_entries,
            "strategy_counts": dict(self.strategy_counts),
            "errors": [error.to_dict() for error in self.errors],
            "patterns": sorted(category.value for category in self.patterns),
            "risk_assessment": self.risk_assessment.to_dict(),
            "trends": self.trends.to_dict(),
            "recommendations": list(self.recommendations),
            "remaining_artifacts": list(self.remaining_artifacts),
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "duration_seconds": self.duration_seconds,
        }
