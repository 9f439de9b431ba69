"""Protected filesystem locations that must never be swept.

Artifacts found under these locations are rejected by the validator even
when their names match the artifact pattern, because the surrounding
directory holds credentials or system state.
"""

import fnmatch
from pathlib import Path

# Protected filesystem path patterns (glob-style).
# Patterns starting with ~ are expanded to the user's home directory
# before matching. Patterns starting with / are matched as-is.
PROTECTED_PATH_PATTERNS: list[str] = [
    # SSH and security
    "~/.ssh/*",
    "~/.gnupg/*",
    "~/.gpg/*",
    "~/.pki/*",
    # Keyrings and password stores
    "~/.local/share/keyrings/*",
    "~/.password-store/*",
    # dotsweep itself (audit log, run history)
    "~/.config/dotsweep/*",
    "~/.local/state/dotsweep/*",
    # Version control internals
    "*/.git/*",
    # System
    "/etc/*",
    "/boot/*",
    "/proc/*",
    "/sys/*",
    "/dev/*",
]


def is_protected_path(path: str) -> bool:
    """Check if a filesystem path is protected and must not be swept.

    The path argument should be an absolute path (e.g., /home/user/.ssh/.id!x).
    Patterns using ~ notation are expanded to the actual home directory before
    comparison using fnmatch for glob-style matching.

    Args:
        path: Absolute filesystem path to check.

    Returns:
        True if the path matches any protected pattern, False otherwise.
    """
    home = str(Path.home())

    for pattern in PROTECTED_PATH_PATTERNS:
        expanded = home + pattern[1:] if pattern.startswith("~") else pattern

        if fnmatch.fnmatch(path, expanded):
            return True

    return False
