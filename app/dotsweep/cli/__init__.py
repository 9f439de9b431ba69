"""CLI package for dotsweep.

This package contains the Typer application and all subcommands.
"""

from dotsweep.cli.main import app

__all__ = ["app"]
