"""Audit command for viewing the audit trail.

This module provides the `dotsweep audit` command for reading recent
entries from the JSONL audit log.
"""

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from dotsweep.audit.recorder import AuditRecorder
from dotsweep.core.paths import get_audit_log_path
from dotsweep.models.audit import AuditLevel
from dotsweep.utils.formatting import console, create_table, print_info

_LEVEL_STYLES: dict[AuditLevel, str] = {
    AuditLevel.INFO: "info",
    AuditLevel.WARN: "warning",
    AuditLevel.ERROR: "error",
}

app = typer.Typer(
    name="audit",
    help="View the audit log.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def audit(
    ctx: typer.Context,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Maximum number of entries to show.",
        ),
    ] = 20,
    level: Annotated[
        AuditLevel | None,
        typer.Option(
            "--level",
            "-l",
            help="Only show entries of this level.",
        ),
    ] = None,
    log_path: Annotated[
        Path | None,
        typer.Option(
            "--log",
            help="Audit log to read (default: state directory).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show recent audit log entries, newest first.

    Examples:
        dotsweep audit              # Show last 20 entries
        dotsweep audit -n 100 -l error
        dotsweep audit --json       # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    recorder = AuditRecorder(log_path or get_audit_log_path())
    entries = recorder.read_entries()
    if level is not None:
        entries = [entry for entry in entries if entry.level == level]
    entries = entries[:limit]

    if json_output:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
        return

    if not entries:
        print_info("No audit entries found.")
        return

    table = create_table("Audit Log")
    table.add_column("Timestamp", style="muted", no_wrap=True)
    table.add_column("Level")
    table.add_column("Message", style="text")
    table.add_column("Details", style="muted")

    for entry in entries:
        style = _LEVEL_STYLES[entry.level]
        details = ", ".join(f"{key}={value}" for key, value in entry.payload.items())
        table.add_row(
            entry.timestamp[:19].replace("T", " "),
            f"[{style}]{entry.level.value}[/]",
            escape(entry.message),
            escape(details),
        )

    console.print(table)
