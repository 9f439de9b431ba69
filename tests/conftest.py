"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
import time
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from dotsweep.core.config import RunConfig
from dotsweep.scanners.base import Scanner

TWO_HOURS = 2 * 3600


class StubScanner(Scanner):
    """Scanner returning a fixed list of paths, for deterministic discovery."""

    def __init__(
        self,
        name: str,
        paths: Sequence[Path] = (),
        *,
        available: bool = True,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self.paths = list(paths)
        self._available = available
        self._error = error
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    def is_available(self) -> bool:
        return self._available

    async def scan(self, config: RunConfig) -> list[Path]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return [path for path in self.paths if path.exists()]


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point XDG config and state directories into the test's tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """Empty directory to clean."""
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def audit_log(tmp_path: Path) -> Path:
    """Audit log location outside the target directory."""
    return tmp_path / "state" / "audit.jsonl"


@pytest.fixture
def run_config(target: Path, audit_log: Path) -> RunConfig:
    """Configuration for a live run against the target directory."""
    return RunConfig(target_dir=target, audit_log_path=audit_log)


@pytest.fixture
def make_artifact() -> Callable[..., Path]:
    """Factory creating a file aged past the default minimum age."""

    def _make(
        directory: Path,
        name: str,
        content: bytes = b"scratch",
        age_seconds: float = TWO_HOURS,
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_bytes(content)
        stamp = time.time() - age_seconds
        os.utime(path, (stamp, stamp))
        return path

    return _make


@pytest.fixture
def stub_scanner() -> type[StubScanner]:
    """The StubScanner class, for tests that need fixed discovery results."""
    return StubScanner
