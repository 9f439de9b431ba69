"""XDG-compliant path management for dotsweep.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/dotsweep/
- State: ~/.local/state/dotsweep/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dotsweep"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dotsweep/ (or XDG_CONFIG_HOME/dotsweep/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the audit log and the run history used for
    trend analysis. It persists between runs but is not configuration.

    Returns:
        Path to ~/.local/state/dotsweep/ (or XDG_STATE_HOME/dotsweep/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_config_path() -> Path:
    """Get the default run configuration file path.

    Returns:
        Path to ~/.config/dotsweep/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_audit_log_path() -> Path:
    """Get the default audit log path.

    Returns:
        Path to ~/.local/state/dotsweep/audit.jsonl.
    """
    return get_state_dir() / "audit.jsonl"


def get_trend_history_path() -> Path:
    """Get the run history file used for cross-run trends.

    Returns:
        Path to ~/.local/state/dotsweep/trends.jsonl.
    """
    return get_state_dir() / "trends.jsonl"
