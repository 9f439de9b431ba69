"""Config command implementation.

Shows the effective run configuration and writes a default config file.
"""

from pathlib import Path
from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from dotsweep.core.config import RunConfig, config_to_dict, load_run_config, save_run_config
from dotsweep.core.errors import ConfigError
from dotsweep.core.paths import get_config_path
from dotsweep.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    name="config",
    help="Manage dotsweep configuration.",
    no_args_is_help=True,
)


@app.command("show")
def show(
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file to show instead of the default location.",
        ),
    ] = None,
) -> None:
    """Print the effective configuration as TOML.

    Values missing from the file are shown with their defaults.
    """
    try:
        config = load_run_config(config_file)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = config_file or get_config_path()
    note = "" if source.exists() else " (not present, defaults)"
    console.print(f"[muted]# {escape(str(source))}{note}[/]", soft_wrap=True)
    console.print(
        tomli_w.dumps(config_to_dict(config)), markup=False, highlight=False, soft_wrap=True
    )


@app.command("init")
def init(
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Where to write the config file.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    target = config_file or get_config_path()
    if target.exists() and not force:
        print_warning(f"Config already exists at {target} (use --force to overwrite).")
        raise typer.Exit(code=1)

    try:
        written = save_run_config(RunConfig(), target)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {written}")
