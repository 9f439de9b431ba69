"""Per-run state threaded through every stage.

A RunContext is created at the start of each run and owns everything the
run mutates: counters, the seen-path set, the candidate list and the
audit recorder. Nothing is shared between runs, so two runs against
different targets can proceed side by side.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from dotsweep.audit.recorder import AuditRecorder
from dotsweep.core.config import RunConfig
from dotsweep.models.audit import AuditLevel
from dotsweep.models.candidate import CandidateFile
from dotsweep.models.metrics import ErrorKind, RunError, RunMetrics
from dotsweep.scanners.dedup import SeenPathSet

logger = logging.getLogger(__name__)

_LOG_LEVELS: dict[AuditLevel, int] = {
    AuditLevel.INFO: logging.INFO,
    AuditLevel.WARN: logging.WARNING,
    AuditLevel.ERROR: logging.ERROR,
}


@dataclass(slots=True)
class RunContext:
    """Mutable state of one run.

    Attributes:
        config: Effective configuration for this run.
        audit: Recorder for structured audit entries.
        metrics: Counters and analytics, zeroed at creation.
        seen: Canonical paths admitted so far.
        candidates: Every admitted candidate, in discovery order.
    """

    config: RunConfig
    audit: AuditRecorder
    metrics: RunMetrics = field(default_factory=RunMetrics)
    seen: SeenPathSet = field(default_factory=SeenPathSet)
    candidates: list[CandidateFile] = field(default_factory=lambda: [])

    @classmethod
    def create(cls, config: RunConfig) -> "RunContext":
        """Build a fresh context for a configuration."""
        audit = AuditRecorder(config.audit_log_path, enabled=config.enable_audit_log)
        return cls(config=config, audit=audit, metrics=RunMetrics(dry_run=config.dry_run))

    def event(self, level: AuditLevel, message: str, **payload: Any) -> None:
        """Log an event and append it to the audit trail."""
        logger.log(_LOG_LEVELS[level], "%s %s", message, payload if payload else "")
        if self.audit.record(level, message, payload):
            self.metrics.audit_entries += 1

    def info(self, message: str, **payload: Any) -> None:
        self.event(AuditLevel.INFO, message, **payload)

    def warn(self, message: str, **payload: Any) -> None:
        self.event(AuditLevel.WARN, message, **payload)

    def fail(self, kind: ErrorKind, message: str, path: str | None = None) -> RunError:
        """Record an error in the metrics, the log and the audit trail.

        Args:
            kind: Error classification; used as the log marker.
            message: Description of the failure.
            path: Affected file, if any.

        Returns:
            The recorded RunError.
        """
        error = self.metrics.add_error(kind, message, path)
        level = AuditLevel.ERROR if kind.fatal else AuditLevel.WARN
        self.event(level, str(error), kind=kind.value, path=path)
        return error
