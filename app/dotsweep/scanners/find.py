"""External-command discovery strategy.

Delegates enumeration to ``find(1)``. Useful where the native traversal
is slow (network mounts) and as an independent second opinion on what
exists under the target.
"""

import logging
from pathlib import Path

import aiofiles.os

from dotsweep.core.config import RunConfig
from dotsweep.core.errors import DiscoveryError
from dotsweep.scanners.base import Scanner
from dotsweep.scanners.patterns import BACKUP_GLOB, is_backup_name
from dotsweep.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class FindScanner(Scanner):
    """Discovers artifacts by running ``find``.

    Args:
        executable: Name or path of the find binary.
        timeout: Maximum seconds to wait for the command.
    """

    def __init__(self, executable: str = "find", timeout: float = 120.0) -> None:
        self._executable = executable
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "find"

    def is_available(self) -> bool:
        return command_exists(self._executable)

    def build_command(self, config: RunConfig) -> list[str]:
        """Build the find invocation for a configuration."""
        return [
            self._executable,
            str(config.target_dir),
            "-maxdepth",
            str(config.max_depth),
            "-type",
            "f",
            "-name",
            config.file_pattern,
            "!",
            "-name",
            BACKUP_GLOB,
        ]

    async def scan(self, config: RunConfig) -> list[Path]:
        """Run find and parse one path per output line.

        A non-zero exit with usable output (typically permission denied
        in a subdirectory) is logged and the output kept.

        Raises:
            DiscoveryError: If find cannot be executed or fails without output.
        """
        if not await aiofiles.os.path.isdir(config.target_dir):
            logger.debug("Target %s does not exist, nothing to find", config.target_dir)
            return []

        try:
            result = await run_command(self.build_command(config), timeout=self._timeout)
        except (OSError, TimeoutError) as e:
            raise DiscoveryError(self.name, f"cannot run {self._executable}: {e}") from e

        if not result.success:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            if not result.lines:
                raise DiscoveryError(self.name, detail)
            logger.warning("find reported problems under %s: %s", config.target_dir, detail)

        return [Path(line) for line in result.lines if not is_backup_name(Path(line).name)]
