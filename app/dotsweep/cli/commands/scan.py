"""Scan command implementation.

Lists artifact candidates without validating or deleting anything.
"""

import asyncio
import json
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.markup import escape

from dotsweep.core.config import load_run_config
from dotsweep.core.engine import CleanupEngine
from dotsweep.core.errors import ConfigError
from dotsweep.models.candidate import CandidateFile, PatternCategory
from dotsweep.pipeline.analyzer import classify_name, risk_score
from dotsweep.utils.formatting import (
    console,
    create_table,
    format_risk,
    format_size,
    print_error,
    print_info,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class ScanRow:
    """Display data for one discovered candidate."""

    path: str
    strategy: str
    category: PatternCategory
    size: int | None
    age_seconds: float | None
    risk_score: int | None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "strategy": self.strategy,
            "category": self.category.value,
            "size": self.size,
            "age_seconds": self.age_seconds,
            "risk_score": self.risk_score,
        }


def _describe(candidate: CandidateFile, now: float) -> ScanRow:
    category = classify_name(candidate.name)
    try:
        st = candidate.path.stat(follow_symlinks=False)
    except OSError:
        return ScanRow(str(candidate.path), candidate.strategy, category, None, None, None)

    age = max(0.0, now - st.st_mtime)
    return ScanRow(
        path=str(candidate.path),
        strategy=candidate.strategy,
        category=category,
        size=st.st_size,
        age_seconds=age,
        risk_score=risk_score(category, st.st_size, age),
    )


def _format_age(seconds: float | None) -> str:
    if seconds is None:
        return "-"
    if seconds < 3600:
        return f"{int(seconds // 60)}m"
    if seconds < 86400:
        return f"{int(seconds // 3600)}h"
    return f"{int(seconds // 86400)}d"


app = typer.Typer(
    name="scan",
    help="List artifacts without removing them.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def scan(
    ctx: typer.Context,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to load instead of the default location.",
        ),
    ] = None,
    target_dir: Annotated[
        Path | None,
        typer.Option(
            "--target-dir",
            "-t",
            help="Root directory to scan.",
        ),
    ] = None,
    pattern: Annotated[
        str | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Artifact basename glob.",
        ),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            help="Maximum search depth.",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Discover artifacts with every available strategy.

    Candidates are deduplicated across strategies but not validated; use
    'dotsweep clean --dry-run' to see what a run would actually remove.

    Examples:
        dotsweep scan -t ~/projects
        dotsweep scan -t . --format json
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        config = load_run_config(config_file).with_overrides(
            target_dir=target_dir.expanduser() if target_dir else None,
            file_pattern=pattern,
            max_depth=max_depth,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    candidates = asyncio.run(CleanupEngine(config).discover())
    now = time.time()
    rows = [_describe(candidate, now) for candidate in candidates]

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([row.to_dict() for row in rows]))
        return

    if not rows:
        print_info(f"No artifacts found under {config.target_dir}.")
        return

    table = create_table(f"Artifacts under {config.target_dir}")
    table.add_column("Path", style="text", no_wrap=True)
    table.add_column("Found by", style="muted")
    table.add_column("Category", style="info")
    table.add_column("Size", justify="right")
    table.add_column("Age", justify="right", style="muted")
    table.add_column("Risk", justify="right")
    for row in rows:
        table.add_row(
            escape(row.path),
            row.strategy,
            row.category.value,
            format_size(row.size),
            _format_age(row.age_seconds),
            format_risk(row.risk_score),
        )
    console.print(table)
    console.print(f"\n[muted]{len(rows)} artifact(s) found[/]")
