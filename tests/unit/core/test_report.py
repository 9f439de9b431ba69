"""Unit tests for the run report renderer."""

from dotsweep.core.report import render_report
from dotsweep.models.candidate import PatternCategory
from dotsweep.models.metrics import ErrorKind, RunMetrics
from dotsweep.models.trend import TrendDirection, TrendSummary


class TestRenderReport:
    """Tests for render_report function."""

    def test_contains_all_sections(self) -> None:
        """Every report section is present."""
        metrics = RunMetrics()
        metrics.finish()

        report = render_report(metrics)

        for title in (
            "Summary",
            "Pattern Analysis",
            "Risk Assessment",
            "Trends",
            "Recommendations",
            "Errors",
        ):
            assert f"\n{title}\n" in report

    def test_summary_values(self) -> None:
        """Counters and status appear in the summary."""
        metrics = RunMetrics(files_found=3, files_deleted=2, files_skipped=1)
        metrics.count_found("find", 0)
        metrics.finish()

        report = render_report(metrics)

        assert "Status:            SUCCESS" in report
        assert "Files found:       3" in report
        assert "Deleted:           2" in report
        assert "Found by strategy: find=0" in report
        assert "Duration:" in report

    def test_dry_run_labels(self) -> None:
        """Dry runs report would-delete counts."""
        metrics = RunMetrics(dry_run=True, files_deleted=4)
        metrics.finish()

        report = render_report(metrics)

        assert "(dry run)" in report
        assert "Would delete:      4" in report

    def test_analysis_and_errors(self) -> None:
        """Patterns, risk buckets, trends and errors are listed."""
        metrics = RunMetrics()
        metrics.patterns.update({PatternCategory.SWAP, PatternCategory.LOCK})
        metrics.risk_assessment.add(75)
        metrics.trends = TrendSummary(size_trend=TrendDirection.INCREASING)
        metrics.recommendations.append("Review 1 high-risk artifact(s).")
        metrics.add_error(ErrorKind.DELETE, "permission denied", "/p/.a!swp")
        metrics.finish()

        report = render_report(metrics)

        assert "  - lock\n  - swap" in report
        assert "high (>=70):     1" in report
        assert "size:      increasing" in report
        assert "  - Review 1 high-risk artifact(s)." in report
        assert "  - [DeleteFailure] /p/.a!swp: permission denied" in report
        assert "Status:            PARTIAL" in report
