"""Integrity-verified backups taken before deletion.

A backup is written next to the original as
``<name>.backup.<epoch-ms>[.hash-<short>]``. When the original's digest
is known the copy is re-hashed, and a copy whose digest differs is
deleted again rather than kept.
"""

import logging
import shutil
import time
from pathlib import Path

import aiofiles.os

from dotsweep.core.context import RunContext
from dotsweep.models.candidate import BackupRecord, CandidateFile
from dotsweep.models.metrics import ErrorKind
from dotsweep.pipeline.hasher import file_digest
from dotsweep.scanners.patterns import backup_name

logger = logging.getLogger(__name__)

_copy_file = aiofiles.os.wrap(shutil.copy2)


def backup_path_for(candidate: CandidateFile, epoch_ms: int | None = None) -> Path:
    """Return the path a backup of the candidate would be written to."""
    if epoch_ms is None:
        epoch_ms = int(time.time() * 1000)
    return candidate.path.with_name(backup_name(candidate.name, epoch_ms, candidate.digest))


async def _discard(path: Path) -> None:
    try:
        await aiofiles.os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove rejected backup %s: %s", path, e)


async def backup_candidate(ctx: RunContext, candidate: CandidateFile) -> bool:
    """Copy a candidate aside and verify the copy.

    In dry-run mode nothing is written and the call reports success.

    Returns:
        True if an acceptable backup exists (or would exist in dry-run),
        False if the copy failed or did not verify. A False result means
        the original must stay on disk.
    """
    if ctx.config.dry_run:
        ctx.info("Would back up", path=str(candidate.path))
        return True

    target = backup_path_for(candidate)
    try:
        await _copy_file(candidate.path, target)
    except OSError as e:
        await _discard(target)
        ctx.fail(ErrorKind.BACKUP, f"cannot copy to {target.name}: {e}", str(candidate.path))
        return False

    if candidate.digest is not None:
        try:
            copy_digest: str | None = await file_digest(target)
        except OSError as e:
            logger.debug("Cannot re-hash backup %s: %s", target, e)
            copy_digest = None

        if copy_digest != candidate.digest:
            await _discard(target)
            ctx.fail(
                ErrorKind.BACKUP_INTEGRITY,
                f"backup digest {copy_digest or 'unreadable'} does not match "
                f"original {candidate.digest}; backup discarded",
                str(candidate.path),
            )
            return False

    candidate.backup = BackupRecord(
        original_path=str(candidate.path),
        backup_path=str(target),
        verification_hash=candidate.digest,
    )
    ctx.metrics.files_backed_up += 1
    ctx.info(
        "Backup created",
        path=str(candidate.path),
        backup=str(target),
        verified=candidate.digest is not None,
    )
    return True
