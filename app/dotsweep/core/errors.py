"""Exception hierarchy for dotsweep.

Per-file problems during a run are not raised to the caller; they are
converted to :class:`~dotsweep.models.metrics.RunError` values on the run
context. The exceptions here cover configuration loading, strategy-scoped
discovery failures and the process-terminating run abort.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotsweep.models.metrics import RunMetrics


class DotsweepError(Exception):
    """Base exception for dotsweep errors."""


class ConfigError(DotsweepError):
    """Base exception for run configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""


class DiscoveryError(DotsweepError):
    """Raised when a discovery strategy fails to enumerate the target."""

    def __init__(self, strategy: str, message: str) -> None:
        super().__init__(f"{strategy}: {message}")
        self.strategy = strategy


class RunAborted(SystemExit):
    """Raised when a failed run must terminate the process.

    Subclasses SystemExit so an uncaught abort exits with status 1,
    while callers that need the metrics can still catch it.
    """

    def __init__(self, metrics: RunMetrics) -> None:
        super().__init__(1)
        self.metrics = metrics
