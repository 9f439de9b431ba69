"""Append-only audit log.

This module provides the AuditRecorder class for writing and reading
structured audit entries in a JSONL file.
"""

import json
import logging
from pathlib import Path
from typing import Any

from dotsweep.models.audit import AuditEntry, AuditLevel, create_audit_entry

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Writes audit entries to a JSONL file.

    The audit log uses JSON Lines format where each line is a complete
    JSON object representing an AuditEntry. Writes never raise: a failed
    write is logged at debug level and reported as not recorded.

    Attributes:
        path: Location of the audit log.
        enabled: Whether entries are written at all.
    """

    def __init__(self, path: Path, enabled: bool = True) -> None:
        self._path = path
        self._enabled = enabled

    @property
    def path(self) -> Path:
        """Path to the audit log file."""
        return self._path

    @property
    def enabled(self) -> bool:
        """Whether this recorder writes entries."""
        return self._enabled

    def record(
        self,
        level: AuditLevel,
        message: str,
        payload: dict[str, Any] | None = None,
    ) -> bool:
        """Append one entry to the audit log.

        Creates the file and parent directories if they don't exist.

        Args:
            level: Event severity.
            message: Event description.
            payload: Structured event details.

        Returns:
            True if the entry was written, False if disabled or the write failed.
        """
        if not self._enabled:
            return False

        try:
            entry = create_audit_entry(level, message, payload)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open(mode="a", encoding="utf-8") as f:
                f.write(entry.to_json_line() + "\n")
        except (OSError, TypeError, ValueError) as e:
            logger.debug("Audit write to %s failed: %s", self._path, e)
            return False

        return True

    def read_entries(self, limit: int | None = None) -> list[AuditEntry]:
        """Read audit entries, newest first.

        Args:
            limit: Maximum number of entries to return.
                  If None, returns all entries.

        Returns:
            List of AuditEntry, newest first.
            Returns empty list if file doesn't exist.
        """
        if not self._path.exists():
            return []

        entries: list[AuditEntry] = []

        with self._path.open(encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue

                try:
                    entries.append(AuditEntry.from_json_line(line))
                except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                    logger.warning("Skipping corrupt audit line %d: %s", line_num, str(e))
                    continue

        entries.reverse()

        if limit is not None:
            return entries[:limit]

        return entries
