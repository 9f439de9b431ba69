"""Trend collaborator interface.

The engine reports each run to a trend collector and embeds whatever
trend labels and recommendations it returns. It never computes
cross-run trends itself and owns no historical storage.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from dotsweep.models.trend import CandidateMetrics, TrendAnalysis


class TrendCollector(ABC):
    """Abstract base class for historical trend stores.

    Example:
        >>> collector = HistoryTrendCollector()
        >>> op = collector.start_operation("cleanup", "sequential")
        >>> collector.record_file_metrics(metrics)
        >>> analysis = collector.analyze_patterns()
        >>> collector.complete_operation(op, success=True)
        >>> collector.save_metrics()
    """

    @abstractmethod
    def start_operation(self, kind: str, method: str) -> str:
        """Register the start of an operation.

        Args:
            kind: Operation kind (e.g. "cleanup").
            method: How it runs (e.g. "parallel", "sequential", "dry-run").

        Returns:
            Identifier passed back to :meth:`complete_operation`.
        """

    @abstractmethod
    def complete_operation(
        self,
        operation_id: str,
        success: bool,
        errors: Sequence[str] | None = None,
    ) -> None:
        """Register the end of an operation."""

    @abstractmethod
    def record_file_metrics(self, metrics: CandidateMetrics) -> None:
        """Record metrics for one analysed file of the current operation."""

    @abstractmethod
    def analyze_patterns(self) -> TrendAnalysis:
        """Compare the current operation with history.

        Returns:
            Trend labels and free-text recommendations.
        """

    @abstractmethod
    def save_metrics(self) -> None:
        """Persist the current operation for future comparisons."""


class NullTrendCollector(TrendCollector):
    """Collector that keeps nothing and always lacks history."""

    def __init__(self) -> None:
        self._counter = 0

    def start_operation(self, kind: str, method: str) -> str:
        self._counter += 1
        return f"{kind}-{self._counter}"

    def complete_operation(
        self,
        operation_id: str,
        success: bool,
        errors: Sequence[str] | None = None,
    ) -> None:
        return None

    def record_file_metrics(self, metrics: CandidateMetrics) -> None:
        return None

    def analyze_patterns(self) -> TrendAnalysis:
        return TrendAnalysis()

    def save_metrics(self) -> None:
        return None
