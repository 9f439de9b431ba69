"""Candidate artifact models.

This module defines the per-file records that flow through a run:
the discovered candidate, its lifecycle status, its pattern category
and the backup record created before deletion.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class CandidateStatus(str, Enum):
    """Lifecycle status of a candidate within one run.

    Attributes:
        PENDING: Discovered, not yet processed.
        SKIPPED: Rejected by validation policy and left untouched.
        DELETED: Removed from disk.
        WOULD_DELETE: Dry-run outcome; would have been removed.
        RETAINED: Kept on disk because the required backup failed.
        FAILED: Deletion was attempted and raised an error.
    """

    PENDING = "pending"
    SKIPPED = "skipped"
    DELETED = "deleted"
    WOULD_DELETE = "would_delete"
    RETAINED = "retained"
    FAILED = "failed"


class PatternCategory(str, Enum):
    """Artifact classification derived from the filename shape.

    Attributes:
        SWAP: Editor swap file (may hold unsaved work).
        LOCK: Lock file left by an editor or tool.
        CACHE: Regenerable cache entry.
        TEMP: Partial download or temporary write.
        UNKNOWN: No recognised shape.
    """

    SWAP = "swap"
    LOCK = "lock"
    CACHE = "cache"
    TEMP = "temp"
    UNKNOWN = "unknown"


class RiskLevel(str, Enum):
    """Risk bucket for a 0-100 risk score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Bucket a score: low < 30, medium 30-69, high >= 70."""
        if score >= 70:
            return cls.HIGH
        if score >= 30:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True, slots=True)
class BackupRecord:
    """Relation between an artifact and its accepted backup copy.

    Attributes:
        original_path: Path of the artifact that was backed up.
        backup_path: Path of the backup copy.
        verification_hash: Digest shared by original and copy, None when
            hashing was disabled and the copy is unverified.
    """

    original_path: str
    backup_path: str
    verification_hash: str | None = None


@dataclass(slots=True)
class CandidateFile:
    """A file discovered as a cleanup candidate.

    Mutated in place as it moves through validation, hashing, backup,
    deletion and analysis. Discarded once the run report is built.

    Attributes:
        path: Absolute path of the artifact.
        strategy: Name of the scanner that discovered it.
        size: Size in bytes from the validation stat snapshot.
        mtime: Modification time (epoch seconds) from the stat snapshot.
        digest: SHA-256 hex digest, computed lazily when hashing is enabled.
        category: Pattern category assigned during analysis.
        risk_score: Risk score (0-100) assigned during analysis.
        status: Current lifecycle status.
        skip_reason: Why validation rejected the file.
        backup: Accepted backup, if one was made.
        error: Last error message attached to this file.
    """

    path: Path
    strategy: str
    size: int | None = None
    mtime: float | None = None
    digest: str | None = None
    category: PatternCategory | None = None
    risk_score: int | None = None
    status: CandidateStatus = CandidateStatus.PENDING
    skip_reason: str | None = None
    backup: BackupRecord | None = None
    error: str | None = None

    @property
    def name(self) -> str:
        """Basename of the artifact."""
        return self.path.name

    @property
    def validated(self) -> bool:
        """Whether the candidate passed validation."""
        return self.status not in (CandidateStatus.PENDING, CandidateStatus.SKIPPED)

    def skip(self, reason: str) -> None:
        """Mark the candidate as rejected by policy."""
        self.status = CandidateStatus.SKIPPED
        self.skip_reason = reason
