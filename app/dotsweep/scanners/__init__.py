"""Artifact discovery strategies.

This module exports the scanner interface, the two default strategies
and the deduplicating seen-path set that merges their results.
"""

from dotsweep.scanners.base import Scanner
from dotsweep.scanners.dedup import SeenPathSet, canonical_path
from dotsweep.scanners.find import FindScanner
from dotsweep.scanners.walk import WalkScanner


def default_scanners() -> list[Scanner]:
    """Return the default strategies in the order they run."""
    return [FindScanner(), WalkScanner()]


__all__ = [
    "FindScanner",
    "Scanner",
    "SeenPathSet",
    "WalkScanner",
    "canonical_path",
    "default_scanners",
]
