"""Unit tests for run configuration loading, saving and overrides."""

import tomllib
from pathlib import Path

import pytest
from dotsweep.core.config import (
    DEFAULT_FILE_PATTERN,
    DEFAULT_MAX_FILE_SIZE,
    RunConfig,
    config_to_dict,
    load_run_config,
    save_run_config,
)
from dotsweep.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from dotsweep.core.paths import get_audit_log_path
from pydantic import ValidationError


class TestRunConfigDefaults:
    """Tests for RunConfig default values."""

    def test_defaults(self) -> None:
        """Defaults match the documented CLI defaults."""
        config = RunConfig()

        assert config.target_dir == Path("utils")
        assert config.file_pattern == DEFAULT_FILE_PATTERN == ".*!*"
        assert config.max_depth == 10
        assert config.dry_run is False
        assert config.backup_before_delete is False
        assert config.enable_hashing is True
        assert config.enable_audit_log is True
        assert config.max_file_size == DEFAULT_MAX_FILE_SIZE == 104857600
        assert config.min_file_age == 60.0
        assert config.enable_parallel is False
        assert config.parallel_limit == 5
        assert config.exit_on_failure is False

    def test_audit_log_defaults_to_state_dir(self) -> None:
        """The audit log defaults to the XDG state directory."""
        assert RunConfig().audit_log_path == get_audit_log_path()

    def test_is_frozen(self) -> None:
        """RunConfig cannot be mutated after creation."""
        config = RunConfig()
        with pytest.raises(ValidationError):
            config.dry_run = True  # type: ignore[misc]

    def test_rejects_unknown_fields(self) -> None:
        """Unknown fields are rejected."""
        with pytest.raises(ValidationError):
            RunConfig(unknown=True)  # type: ignore[call-arg]

    @pytest.mark.parametrize(
        "field,value",
        [("parallel_limit", 0), ("max_depth", 0), ("max_file_size", -1), ("min_file_age", -1)],
    )
    def test_rejects_out_of_range(self, field: str, value: int) -> None:
        """Numeric limits are range checked."""
        with pytest.raises(ValidationError):
            RunConfig(**{field: value})


class TestWithOverrides:
    """Tests for RunConfig.with_overrides."""

    def test_applies_overrides(self, tmp_path: Path) -> None:
        """Given fields replace the base values."""
        config = RunConfig().with_overrides(target_dir=tmp_path, dry_run=True)

        assert config.target_dir == tmp_path
        assert config.dry_run is True

    def test_ignores_none(self) -> None:
        """None values leave the base value in place."""
        base = RunConfig(parallel_limit=8)

        assert base.with_overrides(parallel_limit=None).parallel_limit == 8

    def test_no_overrides_returns_same_object(self) -> None:
        """Without effective overrides the base config is returned."""
        base = RunConfig()

        assert base.with_overrides(dry_run=None) is base

    def test_base_is_unchanged(self) -> None:
        """Overrides never modify the base config."""
        base = RunConfig()
        base.with_overrides(dry_run=True)

        assert base.dry_run is False

    def test_invalid_override_raises_config_error(self) -> None:
        """Invalid values raise ConfigError."""
        with pytest.raises(ConfigError, match="Invalid configuration override"):
            RunConfig().with_overrides(parallel_limit=0)

    def test_unknown_override_raises_config_error(self) -> None:
        """Unknown field names raise ConfigError."""
        with pytest.raises(ConfigError):
            RunConfig().with_overrides(colour="blue")


class TestLoadRunConfig:
    """Tests for load_run_config function."""

    def test_missing_default_file_returns_defaults(self) -> None:
        """A missing default config file yields the defaults."""
        assert load_run_config() == RunConfig()

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        """A missing explicit config file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_run_config(tmp_path / "missing.toml")

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values in the file override the defaults."""
        path = tmp_path / "config.toml"
        path.write_text(
            'target_dir = "/srv/work"\nparallel_limit = 3\nenable_parallel = true\n',
            encoding="utf-8",
        )

        config = load_run_config(path)

        assert config.target_dir == Path("/srv/work")
        assert config.parallel_limit == 3
        assert config.enable_parallel is True
        assert config.file_pattern == DEFAULT_FILE_PATTERN

    def test_invalid_toml_raises_parse_error(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("target_dir = [", encoding="utf-8")

        with pytest.raises(ConfigParseError):
            load_run_config(path)

    def test_invalid_content_raises_config_error(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("parallel_limit = 0\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_run_config(path)


class TestSaveRunConfig:
    """Tests for save_run_config function."""

    def test_writes_loadable_toml(self, tmp_path: Path) -> None:
        """Saved config can be loaded back."""
        path = tmp_path / "nested" / "config.toml"
        config = RunConfig(target_dir=tmp_path, parallel_limit=7, min_file_age=5.0)

        written = save_run_config(config, path)

        assert written == path
        assert load_run_config(path) == config

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        """The atomic write leaves only the config file behind."""
        path = tmp_path / "config.toml"

        save_run_config(RunConfig(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_paths_are_strings(self, tmp_path: Path) -> None:
        """Paths are stored as plain strings."""
        path = tmp_path / "config.toml"
        save_run_config(RunConfig(target_dir=Path("/srv/work")), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert data["target_dir"] == "/srv/work"
        assert config_to_dict(RunConfig())["file_pattern"] == DEFAULT_FILE_PATTERN
