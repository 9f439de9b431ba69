"""Native directory traversal discovery strategy."""

import asyncio
import logging
import os
from pathlib import Path

from dotsweep.core.config import RunConfig
from dotsweep.scanners.base import Scanner
from dotsweep.scanners.patterns import is_artifact_name

logger = logging.getLogger(__name__)


class WalkScanner(Scanner):
    """Discovers artifacts with ``os.walk``.

    Depth follows ``find -maxdepth`` semantics: files directly inside the
    target are at depth 1. Symbolic links are neither followed nor
    reported.
    """

    @property
    def name(self) -> str:
        return "walk"

    def is_available(self) -> bool:
        """Always True; the traversal only needs the standard library."""
        return True

    async def scan(self, config: RunConfig) -> list[Path]:
        return await asyncio.to_thread(self._walk, config)

    def _walk(self, config: RunConfig) -> list[Path]:
        target = config.target_dir
        if not target.is_dir():
            logger.debug("Target %s does not exist, walk strategy has nothing to do", target)
            return []

        found: list[Path] = []
        base_depth = len(target.parts)

        for root, dirs, files in os.walk(target, onerror=self._on_error):
            root_path = Path(root)
            # Files in root sit one level below it
            depth = len(root_path.parts) - base_depth + 1
            if depth >= config.max_depth:
                dirs.clear()
            else:
                dirs.sort()

            for name in sorted(files):
                if not is_artifact_name(name, config.file_pattern):
                    continue
                path = root_path / name
                if path.is_symlink() or not path.is_file():
                    continue
                found.append(path)

        return found

    @staticmethod
    def _on_error(error: OSError) -> None:
        logger.warning("Cannot read directory during walk: %s", error)
