"""Trend collaborator data structures.

These are the values exchanged with a trend collector: per-file metrics
going in, trend labels and recommendations coming out.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dotsweep.models.candidate import PatternCategory


class TrendDirection(str, Enum):
    """Direction of a metric compared with previous runs."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient-data"


@dataclass(frozen=True, slots=True)
class CandidateMetrics:
    """Per-file metrics handed to the trend collector.

    Attributes:
        path: Absolute path of the artifact.
        size: Size in bytes.
        age_seconds: Age at analysis time.
        category: Pattern category.
        risk_score: Risk score, None when risk assessment is disabled.
        removed: Whether the file was (or in dry-run would be) deleted.
    """

    path: str
    size: int
    age_seconds: float
    category: PatternCategory
    risk_score: int | None
    removed: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "size": self.size,
            "age_seconds": round(self.age_seconds, 3),
            "category": self.category.value,
            "risk_score": self.risk_score,
            "removed": self.removed,
        }


@dataclass(frozen=True, slots=True)
class TrendSummary:
    """Size, age and frequency trend labels for one run."""

    size_trend: TrendDirection = TrendDirection.INSUFFICIENT_DATA
    age_trend: TrendDirection = TrendDirection.INSUFFICIENT_DATA
    frequency_trend: TrendDirection = TrendDirection.INSUFFICIENT_DATA

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "size_trend": self.size_trend.value,
            "age_trend": self.age_trend.value,
            "frequency_trend": self.frequency_trend.value,
        }


@dataclass(frozen=True, slots=True)
class TrendAnalysis:
    """Result of a trend collector's pattern analysis."""

    summary: TrendSummary = field(default_factory=TrendSummary)
    recommendations: tuple[str, ...] = ()
