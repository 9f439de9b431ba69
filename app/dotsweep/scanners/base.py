"""Abstract base class for artifact discovery strategies.

This module defines the Scanner interface that every discovery strategy
must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from dotsweep.core.config import RunConfig


class Scanner(ABC):
    """Abstract base class for all discovery strategies.

    Scanners enumerate artifact paths under the configured target
    directory. Results from several scanners are merged through a
    :class:`~dotsweep.scanners.dedup.SeenPathSet`, so a scanner does not
    need to know about the others.

    Example:
        >>> scanner = WalkScanner()
        >>> if scanner.is_available():
        ...     for path in await scanner.scan(config):
        ...         print(path)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the strategy name used in metrics and logs."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this strategy can run in the current environment.

        Returns:
            True if the strategy can be used, False otherwise.
        """

    @abstractmethod
    async def scan(self, config: RunConfig) -> list[Path]:
        """Enumerate artifacts under ``config.target_dir``.

        Must return an empty list when the target directory does not
        exist, and must never return backup copies.

        Returns:
            Artifact paths in discovery order.

        Raises:
            DiscoveryError: If enumeration fails.
        """
