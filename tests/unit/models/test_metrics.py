"""Unit tests for run metrics."""

from dotsweep.models.candidate import PatternCategory, RiskLevel
from dotsweep.models.metrics import ErrorKind, RiskHistogram, RunError, RunMetrics, RunStatus


class TestErrorKind:
    """Tests for ErrorKind."""

    def test_fatal_kinds(self) -> None:
        """Only final validation and fatal exceptions fail a run."""
        fatal = {kind for kind in ErrorKind if kind.fatal}

        assert fatal == {ErrorKind.FINAL_VALIDATION, ErrorKind.FATAL}

    def test_str_includes_kind_and_path(self) -> None:
        """RunError renders as a single log line."""
        error = RunError(kind=ErrorKind.HASH, message="unreadable", path="/p/.a!swp")

        assert str(error) == "[HashFailure] /p/.a!swp: unreadable"
        assert str(RunError(kind=ErrorKind.FATAL, message="boom")) == "[FatalRunException] boom"


class TestRiskHistogram:
    """Tests for RiskHistogram."""

    def test_add_counts_each_score_once(self) -> None:
        """Each score lands in exactly one bucket."""
        histogram = RiskHistogram()

        assert histogram.add(10) == RiskLevel.LOW
        assert histogram.add(30) == RiskLevel.MEDIUM
        assert histogram.add(99) == RiskLevel.HIGH
        assert histogram.add(70) == RiskLevel.HIGH

        assert histogram.to_dict() == {"low": 1, "medium": 1, "high": 2}
        assert histogram.total == 4


class TestRunMetrics:
    """Tests for RunMetrics."""

    def test_status_success_without_errors(self) -> None:
        """No errors resolve to SUCCESS."""
        assert RunMetrics().finish() == RunStatus.SUCCESS

    def test_status_partial_with_file_errors(self) -> None:
        """Per-file errors resolve to PARTIAL."""
        metrics = RunMetrics()
        metrics.add_error(ErrorKind.DELETE, "denied", "/p/.a!swp")

        assert metrics.finish() == RunStatus.PARTIAL

    def test_status_failed_with_fatal_errors(self) -> None:
        """A fatal error resolves to FAILED."""
        metrics = RunMetrics()
        metrics.add_error(ErrorKind.DELETE, "denied", "/p/.a!swp")
        metrics.add_error(ErrorKind.FINAL_VALIDATION, "1 artifact(s) remain")

        assert metrics.finish() == RunStatus.FAILED

    def test_count_found_per_strategy(self) -> None:
        """count_found sums per strategy and overall."""
        metrics = RunMetrics()
        metrics.count_found("find", 3)
        metrics.count_found("walk", 1)
        metrics.count_found("find", 0)

        assert metrics.files_found == 4
        assert metrics.strategy_counts == {"find": 3, "walk": 1}

    def test_duration_after_finish(self) -> None:
        """Duration is only known once the run is finished."""
        metrics = RunMetrics()
        assert metrics.duration_seconds is None

        metrics.finish()

        assert metrics.duration_seconds is not None
        assert metrics.duration_seconds >= 0

    def test_to_dict(self) -> None:
        """to_dict renders enums and nested values as plain data."""
        metrics = RunMetrics(dry_run=True)
        metrics.patterns.add(PatternCategory.SWAP)
        metrics.add_error(ErrorKind.HASH, "unreadable", "/p/.a!swp")
        metrics.finish()

        data = metrics.to_dict()

        assert data["status"] == "partial"
        assert data["dry_run"] is True
        assert data["patterns"] == ["swap"]
        assert data["errors"] == [
            {"kind": "HashFailure", "message": "unreadable", "path": "/p/.a!swp"}
        ]
        assert data["risk_assessment"] == {"low": 0, "medium": 0, "high": 0}
        assert data["trends"]["size_trend"] == "insufficient-data"
