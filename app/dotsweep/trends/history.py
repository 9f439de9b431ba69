"""JSONL-backed trend collector.

Each completed operation is summarized as one line in
``~/.local/state/dotsweep/trends.jsonl``. Trends compare the current
operation with the mean of the most recent stored operations.
"""

import json
import logging
import uuid
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from dotsweep.core.paths import get_trend_history_path
from dotsweep.models.candidate import PatternCategory, RiskLevel
from dotsweep.models.trend import CandidateMetrics, TrendAnalysis, TrendDirection, TrendSummary
from dotsweep.trends.base import TrendCollector

logger = logging.getLogger(__name__)

# Relative change treated as a real movement rather than noise
TREND_THRESHOLD = 0.2
DEFAULT_WINDOW = 10


@dataclass(frozen=True, slots=True)
class OperationRecord:
    """Summary of one stored operation.

    Attributes:
        id: Operation identifier.
        timestamp: Completion time (ISO 8601).
        kind: Operation kind.
        method: Execution method.
        success: Whether the operation succeeded.
        error_count: Number of errors reported.
        file_count: Number of analysed files.
        mean_size: Mean file size in bytes (None without files).
        mean_age: Mean file age in seconds (None without files).
        categories: File count per pattern category.
    """

    id: str
    timestamp: str
    kind: str
    method: str
    success: bool
    error_count: int
    file_count: int
    mean_size: float | None
    mean_age: float | None
    categories: dict[str, int] = field(default_factory=lambda: {})

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "kind": self.kind,
            "method": self.method,
            "success": self.success,
            "error_count": self.error_count,
            "file_count": self.file_count,
            "mean_size": self.mean_size,
            "mean_age": self.mean_age,
            "categories": self.categories,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OperationRecord":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
        """
        return cls(
            id=data["id"],
            timestamp=data["timestamp"],
            kind=data["kind"],
            method=data.get("method", ""),
            success=data.get("success", True),
            error_count=data.get("error_count", 0),
            file_count=data["file_count"],
            mean_size=data.get("mean_size"),
            mean_age=data.get("mean_age"),
            categories=data.get("categories", {}),
        )


def _direction(current: float | None, history: list[float]) -> TrendDirection:
    if current is None or not history:
        return TrendDirection.INSUFFICIENT_DATA
    baseline = sum(history) / len(history)
    if baseline == 0:
        return TrendDirection.INCREASING if current > 0 else TrendDirection.STABLE
    change = (current - baseline) / baseline
    if change > TREND_THRESHOLD:
        return TrendDirection.INCREASING
    if change < -TREND_THRESHOLD:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def _mean(values: list[float]) -> float | None:
    return sum(values) / len(values) if values else None


class HistoryTrendCollector(TrendCollector):
    """Trend collector persisting operation summaries to a JSONL file.

    Args:
        path: History file. Defaults to the state directory.
        window: Number of most recent stored operations used as baseline.
    """

    def __init__(self, path: Path | None = None, window: int = DEFAULT_WINDOW) -> None:
        self._path = path if path is not None else get_trend_history_path()
        self._window = window
        self._operation_id: str | None = None
        self._kind = ""
        self._method = ""
        self._success = True
        self._errors: list[str] = []
        self._files: list[CandidateMetrics] = []

    @property
    def path(self) -> Path:
        """Path to the history file."""
        return self._path

    def start_operation(self, kind: str, method: str) -> str:
        self._operation_id = uuid.uuid4().hex[:12]
        self._kind = kind
        self._method = method
        self._success = True
        self._errors = []
        self._files = []
        return self._operation_id

    def complete_operation(
        self,
        operation_id: str,
        success: bool,
        errors: Sequence[str] | None = None,
    ) -> None:
        if operation_id != self._operation_id:
            logger.warning("Completing unknown operation %s", operation_id)
            return
        self._success = success
        self._errors = list(errors or [])

    def record_file_metrics(self, metrics: CandidateMetrics) -> None:
        self._files.append(metrics)

    def load_history(self) -> list[OperationRecord]:
        """Read stored operations, oldest first. Corrupt lines are skipped."""
        if not self._path.exists():
            return []

        records: list[OperationRecord] = []
        with self._path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(OperationRecord.from_dict(json.loads(line)))
                except (json.JSONDecodeError, KeyError, TypeError) as e:
                    logger.warning("Skipping corrupt trend line %d: %s", line_num, e)
        return records

    def current_record(self) -> OperationRecord:
        """Summarize the operation in progress."""
        categories = Counter(m.category.value for m in self._files)
        return OperationRecord(
            id=self._operation_id or "",
            timestamp=datetime.now(UTC).isoformat(),
            kind=self._kind,
            method=self._method,
            success=self._success,
            error_count=len(self._errors),
            file_count=len(self._files),
            mean_size=_mean([float(m.size) for m in self._files]),
            mean_age=_mean([m.age_seconds for m in self._files]),
            categories=dict(categories),
        )

    def analyze_patterns(self) -> TrendAnalysis:
        current = self.current_record()
        history = [r for r in self.load_history() if r.kind == current.kind][-self._window :]

        summary = TrendSummary(
            size_trend=_direction(
                current.mean_size, [r.mean_size for r in history if r.mean_size is not None]
            ),
            age_trend=_direction(
                current.mean_age, [r.mean_age for r in history if r.mean_age is not None]
            ),
            frequency_trend=_direction(
                float(current.file_count), [float(r.file_count) for r in history]
            ),
        )
        return TrendAnalysis(summary=summary, recommendations=self._recommend(current, summary))

    def _recommend(self, current: OperationRecord, summary: TrendSummary) -> tuple[str, ...]:
        advice: list[str] = []

        high_risk = sum(
            1
            for m in self._files
            if m.risk_score is not None and RiskLevel.from_score(m.risk_score) == RiskLevel.HIGH
        )
        if high_risk:
            advice.append(f"Review {high_risk} high-risk artifact(s) before running unattended.")

        if current.categories.get(PatternCategory.SWAP.value):
            advice.append(
                "Editor swap files were found; check for crashed or still-open editor sessions."
            )
        if current.categories.get(PatternCategory.LOCK.value):
            advice.append("Stale lock files were found; confirm no tool still holds them.")

        if summary.frequency_trend == TrendDirection.INCREASING:
            advice.append("Artifact volume is increasing; schedule cleanup more often.")
        if summary.size_trend == TrendDirection.INCREASING:
            advice.append("Artifacts are growing larger; consider enabling backups.")
        if summary.age_trend == TrendDirection.DECREASING:
            advice.append(
                "Artifacts are younger than in earlier runs; raise min_file_age if tools "
                "are still writing them."
            )

        return tuple(advice)

    def save_metrics(self) -> None:
        """Append the current operation to the history file.

        Raises:
            OSError: If the file cannot be written.
        """
        if self._operation_id is None:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open(mode="a", encoding="utf-8") as f:
            f.write(json.dumps(self.current_record().to_dict(), separators=(",", ":")) + "\n")
