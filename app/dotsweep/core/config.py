"""Run configuration and settings.

This module provides the configuration model and I/O functions for a
cleanup run. Defaults live on the model; an optional TOML file overrides
them, and every field can be overridden again per invocation.

Configuration is stored in ~/.config/dotsweep/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dotsweep.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from dotsweep.core.paths import get_audit_log_path, get_config_path

logger = logging.getLogger(__name__)

DEFAULT_FILE_PATTERN = ".*!*"
DEFAULT_MAX_FILE_SIZE = 100 * 1024 * 1024
DEFAULT_MIN_FILE_AGE = 60.0


class RunConfig(BaseModel):
    """Configuration for a single cleanup run.

    Immutable once built. Use :meth:`with_overrides` to derive the
    configuration for one invocation.

    Attributes:
        target_dir: Root directory searched for artifacts.
        file_pattern: Basename glob identifying artifacts.
        max_depth: Maximum search depth (1 = files directly in target_dir).
        dry_run: Analyse and report without touching the filesystem.
        backup_before_delete: Copy each artifact aside before deleting it.
        enable_hashing: Compute a SHA-256 digest per artifact.
        enable_audit_log: Append structured audit entries.
        audit_log_path: Location of the JSONL audit log.
        max_file_size: Artifacts larger than this (bytes) are skipped.
        min_file_age: Artifacts modified more recently than this (seconds) are skipped.
        enable_parallel: Process artifacts in concurrent batches.
        parallel_limit: Batch size for concurrent processing.
        enable_pattern_analysis: Collect pattern categories.
        enable_risk_assessment: Compute risk scores and the risk histogram.
        exit_on_failure: Terminate the process when the run fails.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target_dir: Annotated[
        Path,
        Field(description="Root directory to clean"),
    ] = Path("utils")
    file_pattern: Annotated[
        str,
        Field(min_length=1, description="Artifact basename glob"),
    ] = DEFAULT_FILE_PATTERN
    max_depth: Annotated[
        int,
        Field(ge=1, le=64, description="Maximum search depth"),
    ] = 10
    dry_run: bool = False
    backup_before_delete: bool = False
    enable_hashing: bool = True
    enable_audit_log: bool = True
    audit_log_path: Path = Field(
        default_factory=get_audit_log_path,
        description="JSONL audit log location",
    )
    max_file_size: Annotated[
        int,
        Field(ge=0, description="Maximum artifact size in bytes"),
    ] = DEFAULT_MAX_FILE_SIZE
    min_file_age: Annotated[
        float,
        Field(ge=0, description="Minimum artifact age in seconds"),
    ] = DEFAULT_MIN_FILE_AGE
    enable_parallel: bool = False
    parallel_limit: Annotated[
        int,
        Field(ge=1, le=256, description="Concurrent batch size"),
    ] = 5
    enable_pattern_analysis: bool = True
    enable_risk_assessment: bool = True
    exit_on_failure: bool = False

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy with the given fields replaced.

        ``None`` values are ignored so CLI options that were not given
        fall through to the loaded defaults.

        Raises:
            ConfigError: If an override names an unknown field or fails validation.
        """
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        try:
            return RunConfig.model_validate({**self.model_dump(), **updates})
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration override: {e}") from e


def load_run_config(path: Path | None = None) -> RunConfig:
    """Load run configuration from a TOML file.

    A missing default config file is not an error: the built-in defaults
    are returned. An explicitly given path must exist.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated RunConfig object.

    Raises:
        ConfigNotFoundError: If an explicit config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is not None:
            raise ConfigNotFoundError(f"Config not found: {config_path}")
        logger.debug("No config file at %s, using defaults", config_path)
        return RunConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return RunConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_run_config(config: RunConfig, path: Path | None = None) -> Path:
    """Save run configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The RunConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: RunConfig) -> dict[str, Any]:
    """Convert RunConfig to a TOML/JSON friendly dictionary.

    Paths are rendered as strings.
    """
    return config.model_dump(mode="json")
