"""CLI commands for dotsweep.

This package contains all subcommand implementations.
"""

from dotsweep.cli.commands import audit, clean, config, scan

__all__ = ["audit", "clean", "config", "scan"]
