"""Session-scoped deduplication of discovered paths."""

import os
from collections.abc import Iterable
from pathlib import Path


def canonical_path(path: Path) -> Path:
    """Return the canonical absolute form of a path.

    Symbolic links in parent directories are resolved, so the same file
    reached through two spellings compares equal.
    """
    return Path(os.path.realpath(path))


class SeenPathSet:
    """Set of canonical paths already admitted in one run.

    A fresh instance belongs to each run; final validation uses its own.
    """

    def __init__(self) -> None:
        self._seen: set[Path] = set()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, Path):
            return False
        return canonical_path(path) in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def admit(self, paths: Iterable[Path]) -> list[Path]:
        """Admit paths not seen before.

        Args:
            paths: Paths in discovery order.

        Returns:
            Canonical forms of the newly admitted paths, in input order.
        """
        admitted: list[Path] = []
        for path in paths:
            canonical = canonical_path(path)
            if canonical in self._seen:
                continue
            self._seen.add(canonical)
            admitted.append(canonical)
        return admitted
