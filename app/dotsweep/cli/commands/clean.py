"""Clean command implementation.

Runs a full cleanup: discovery, validation, optional backup, deletion,
analysis and final validation, then prints the run report.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from dotsweep.core.config import RunConfig, load_run_config
from dotsweep.core.engine import CleanupEngine
from dotsweep.core.errors import ConfigError, RunAborted
from dotsweep.core.report import render_report
from dotsweep.models.metrics import RunMetrics, RunStatus
from dotsweep.trends.base import NullTrendCollector, TrendCollector
from dotsweep.trends.history import HistoryTrendCollector
from dotsweep.utils.formatting import console, print_error

app = typer.Typer(
    name="clean",
    help="Remove transient artifacts from a directory tree.",
    invoke_without_command=True,
)


def _print_metrics(metrics: RunMetrics, json_output: bool) -> None:
    if json_output:
        console.print_json(json.dumps(metrics.to_dict()))
    else:
        console.print(
            render_report(metrics), markup=False, highlight=False, soft_wrap=True, end=""
        )


@app.callback(invoke_without_command=True)
def clean(
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
            help="Root directory to clean.",
        ),
    ] = None,
    pattern: Annotated[
        str | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Artifact basename glob (default: '.*!*').",
        ),
    ] = None,
    max_depth: Annotated[
        int | None,
        typer.Option(
            "--max-depth",
            help="Maximum search depth.",
        ),
    ] = None,
    dry_run: Annotated[
        bool | None,
        typer.Option(
            "--dry-run/--no-dry-run",
            help="Report what would be removed without touching anything.",
        ),
    ] = None,
    backup: Annotated[
        bool | None,
        typer.Option(
            "--backup/--no-backup",
            help="Copy each artifact aside before deleting it.",
        ),
    ] = None,
    parallel: Annotated[
        bool | None,
        typer.Option(
            "--parallel/--sequential",
            help="Process artifacts in concurrent batches.",
        ),
    ] = None,
    parallel_limit: Annotated[
        int | None,
        typer.Option(
            "--parallel-limit",
            help="Concurrent batch size.",
        ),
    ] = None,
    hashing: Annotated[
        bool | None,
        typer.Option(
            "--hash/--no-hash",
            help="Compute SHA-256 digests of artifacts.",
        ),
    ] = None,
    audit: Annotated[
        bool | None,
        typer.Option(
            "--audit/--no-audit",
            help="Append entries to the audit log.",
        ),
    ] = None,
    audit_log: Annotated[
        Path | None,
        typer.Option(
            "--audit-log",
            help="Audit log location.",
        ),
    ] = None,
    max_size: Annotated[
        int | None,
        typer.Option(
            "--max-size",
            help="Skip artifacts larger than this many bytes.",
        ),
    ] = None,
    min_age: Annotated[
        float | None,
        typer.Option(
            "--min-age",
            help="Skip artifacts modified within this many seconds.",
        ),
    ] = None,
    exit_on_failure: Annotated[
        bool | None,
        typer.Option(
            "--exit-on-failure/--no-exit-on-failure",
            help="Abort the process with exit code 1 when the run fails.",
        ),
    ] = None,
    no_history: Annotated[
        bool,
        typer.Option(
            "--no-history",
            help="Neither read nor record trend history.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output metrics as JSON.",
        ),
    ] = False,
) -> None:
    """Find and remove artifacts under a target directory.

    Every option overrides the value from the config file for this run
    only. Exits with code 1 when the run status is FAILED.

    Examples:
        dotsweep clean -t ~/projects --dry-run
        dotsweep clean -t ~/projects --backup --parallel
        dotsweep clean --pattern '.~lock.*#' --min-age 0 --json
    """
    if ctx.invoked_subcommand is not None:
        return

    try:
        base: RunConfig = load_run_config(config_file)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    trends: TrendCollector = NullTrendCollector() if no_history else HistoryTrendCollector()
    engine = CleanupEngine(base, trends=trends)

    try:
        metrics = engine.run_sync(
            target_dir=target_dir.expanduser() if target_dir else None,
            file_pattern=pattern,
            max_depth=max_depth,
            dry_run=dry_run,
            backup_before_delete=backup,
            enable_parallel=parallel,
            parallel_limit=parallel_limit,
            enable_hashing=hashing,
            enable_audit_log=audit,
            audit_log_path=audit_log.expanduser() if audit_log else None,
            max_file_size=max_size,
            min_file_age=min_age,
            exit_on_failure=exit_on_failure,
        )
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except RunAborted as e:
        _print_metrics(e.metrics, json_output)
        raise typer.Exit(code=1) from e

    _print_metrics(metrics, json_output)
    if metrics.status == RunStatus.FAILED:
        raise typer.Exit(code=1)
