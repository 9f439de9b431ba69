"""Audit entry model.

This module defines the structured record appended to the audit log for
every info, warning and error event of a run.
"""

import json
import os
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

AUDIT_SCHEMA_VERSION = 1


class AuditLevel(str, Enum):
    """Severity of an audit entry."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class AuditEntry:
    """Single append-only audit record.

    Attributes:
        timestamp: When the event occurred (ISO 8601 with timezone).
        level: Event severity.
        message: Human-readable event description.
        payload: Structured event details.
        pid: Process that wrote the entry.
        schema_version: Version of this record layout.
    """

    timestamp: str
    level: AuditLevel
    message: str
    payload: dict[str, Any] = field(default_factory=lambda: {})
    pid: int = 0
    schema_version: int = AUDIT_SCHEMA_VERSION

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.timestamp:
            msg = "Timestamp cannot be empty"
            raise ValueError(msg)
        if not self.message:
            msg = "Audit message cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage."""
        return {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "message": self.message,
            "payload": self.payload,
            "pid": self.pid,
            "schemaVersion": self.schema_version,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuditEntry":
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the level is invalid.
        """
        return cls(
            timestamp=data["timestamp"],
            level=AuditLevel(data["level"]),
            message=data["message"],
            payload=data.get("payload", {}),
            pid=data.get("pid", 0),
            schema_version=data.get("schemaVersion", AUDIT_SCHEMA_VERSION),
        )

    def to_json_line(self) -> str:
        """Serialize to JSON line for JSONL storage (no trailing newline)."""
        return json.dumps(self.to_dict(), separators=(",", ":"), default=str)

    @classmethod
    def from_json_line(cls, line: str) -> "AuditEntry":
        """Deserialize from JSON line.

        Raises:
            json.JSONDecodeError: If line is not valid JSON.
            KeyError: If required fields are missing.
            TypeError: If the line is not a JSON object.
            ValueError: If data is invalid.
        """
        return cls.from_dict(json.loads(line.strip()))


def create_audit_entry(
    level: AuditLevel,
    message: str,
    payload: dict[str, Any] | None = None,
) -> AuditEntry:
    """Factory function to create a new AuditEntry.

    Automatically fills in the current timestamp and process id.
    """
    return AuditEntry(
        timestamp=datetime.now(UTC).isoformat(),
        level=level,
        message=message,
        payload=payload or {},
        pid=os.getpid(),
    )
