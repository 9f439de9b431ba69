"""Human-readable run report.

Renders RunMetrics as plain text with the sections Summary, Pattern
Analysis, Risk Assessment, Trends, Recommendations and Errors.
"""

from dotsweep.models.metrics import RunMetrics
from dotsweep.utils.formatting import format_size

_RULE = "-" * 60


def _section(title: str, lines: list[str]) -> list[str]:
    return [title, _RULE, *lines, ""]


def render_report(metrics: RunMetrics) -> str:
    """Render the multi-section report for a finished run."""
    status = metrics.status.value.upper() if metrics.status else "RUNNING"
    deleted_label = "Would delete" if metrics.dry_run else "Deleted"
    duration = metrics.duration_seconds

    summary = [
        f"Status:            {status}{' (dry run)' if metrics.dry_run else ''}",
        f"Files found:       {metrics.files_found}",
        f"{deleted_label + ':':<19}{metrics.files_deleted}",
        f"Backed up:         {metrics.files_backed_up}",
        f"Skipped:           {metrics.files_skipped}",
        f"Retained:          {metrics.files_retained}",
        f"Bytes processed:   {format_size(metrics.bytes_processed)}",
        f"Hashes generated:  {metrics.hashes_generated}",
        f"Parallel ops:      {metrics.parallel_operations}",
        f"Audit entries:     {metrics.audit_entries}",
    ]
    if metrics.strategy_counts:
        per_strategy = ", ".join(
            f"{name}={count}" for name, count in metrics.strategy_counts.items()
        )
        summary.append(f"Found by strategy: {per_strategy}")
    if duration is not None:
        summary.append(f"Duration:          {duration:.2f}s")

    categories = sorted(category.value for category in metrics.patterns)
    patterns = [f"  - {value}" for value in categories]
    risk = metrics.risk_assessment
    trends = metrics.trends

    lines: list[str] = ["dotsweep cleanup report", "=" * 60, ""]
    lines += _section("Summary", summary)
    lines += _section("Pattern Analysis", patterns or ["  (no patterns recorded)"])
    lines += _section(
        "Risk Assessment",
        [
            f"  low (<30):       {risk.low}",
            f"  medium (30-69):  {risk.medium}",
            f"  high (>=70):     {risk.high}",
        ],
    )
    lines += _section(
        "Trends",
        [
            f"  size:      {trends.size_trend.value}",
            f"  age:       {trends.age_trend.value}",
            f"  frequency: {trends.frequency_trend.value}",
        ],
    )
    lines += _section(
        "Recommendations",
        [f"  - {text}" for text in metrics.recommendations] or ["  (none)"],
    )
    lines += _section(
        "Errors",
        [f"  - {error}" for error in metrics.errors] or ["  (none)"],
    )
    return "\n".join(lines).rstrip() + "\n"
