"""Artifact and backup naming rules.

An artifact is a file whose basename matches the configured glob (by
default a hidden name with an embedded ``!`` sentinel). A backup copy
carries the ``.backup.`` marker and is never an artifact, even though its
name still matches the glob.
"""

import fnmatch

BACKUP_MARKER = ".backup."
BACKUP_GLOB = f"*{BACKUP_MARKER}*"


def is_backup_name(name: str) -> bool:
    """Check whether a basename carries the backup marker."""
    return BACKUP_MARKER in name


def is_artifact_name(name: str, pattern: str) -> bool:
    """Check whether a basename is a sweepable artifact.

    Matching is case-sensitive, like ``find -name``.

    Args:
        name: File basename.
        pattern: Artifact glob (e.g. ``.*!*``).

    Returns:
        True if the name matches the glob and is not a backup copy.
    """
    return fnmatch.fnmatchcase(name, pattern) and not is_backup_name(name)


def backup_name(name: str, epoch_ms: int, digest: str | None = None) -> str:
    """Build the basename of a backup copy.

    Args:
        name: Basename of the original artifact.
        epoch_ms: Backup creation time in milliseconds since the epoch.
        digest: Original's hex digest; its first 8 characters tag the name.

    Returns:
        ``<name>.backup.<epoch_ms>`` with an optional ``.hash-<short>`` suffix.
    """
    result = f"{name}{BACKUP_MARKER}{epoch_ms}"
    if digest:
        result += f".hash-{digest[:8]}"
    return result
