"""Safety policy applied to every candidate before any destructive step.

A rejected candidate is marked skipped with a reason. Rejections are
never errors; they only keep a file out of the destructive stages.
"""

import logging
import stat
import time

import aiofiles.os

from dotsweep.core.config import RunConfig
from dotsweep.core.context import RunContext
from dotsweep.core.protected import is_protected_path
from dotsweep.models.candidate import CandidateFile
from dotsweep.scanners.patterns import is_artifact_name, is_backup_name

logger = logging.getLogger(__name__)


def check_policy(
    candidate: CandidateFile,
    config: RunConfig,
    st_mode: int,
    now: float,
) -> str | None:
    """Apply the size, age, name and location rules.

    Args:
        candidate: Candidate with its stat snapshot already filled in.
        config: Effective run configuration.
        st_mode: File mode from the stat snapshot.
        now: Current time in epoch seconds.

    Returns:
        The rejection reason, or None if the candidate is acceptable.
    """
    if not stat.S_ISREG(st_mode):
        return "not a regular file"

    if is_protected_path(str(candidate.path)):
        return "inside a protected location"

    if is_backup_name(candidate.name):
        return "carries the backup marker"

    if not is_artifact_name(candidate.name, config.file_pattern):
        return f"name no longer matches {config.file_pattern!r}"

    size = candidate.size or 0
    if size > config.max_file_size:
        return f"size {size} exceeds limit {config.max_file_size}"

    age = now - (candidate.mtime or 0.0)
    if age < config.min_file_age:
        return f"modified {age:.1f}s ago, younger than {config.min_file_age:.0f}s"

    return None


async def validate_candidate(ctx: RunContext, candidate: CandidateFile) -> bool:
    """Stat a candidate and apply the safety policy.

    Fills in the candidate's size and mtime snapshot. On rejection the
    candidate is marked skipped and ``files_skipped`` is incremented.

    Returns:
        True if the candidate may proceed to hashing and deletion.
    """
    try:
        st = await aiofiles.os.stat(candidate.path, follow_symlinks=False)
    except OSError as e:
        reason = f"cannot stat: {e.strerror or e}"
    else:
        candidate.size = st.st_size
        candidate.mtime = st.st_mtime
        reason = check_policy(candidate, ctx.config, st.st_mode, time.time())

    if reason is None:
        return True

    candidate.skip(reason)
    ctx.metrics.files_skipped += 1
    ctx.info("Skipped candidate", path=str(candidate.path), reason=reason)
    return False
