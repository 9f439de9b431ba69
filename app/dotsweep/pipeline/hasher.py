"""Content digests for integrity tracking."""

import hashlib
from pathlib import Path

import aiofiles

from dotsweep.core.context import RunContext
from dotsweep.models.candidate import CandidateFile
from dotsweep.models.metrics import ErrorKind

HASH_ALGORITHM = "sha256"
CHUNK_SIZE = 1024 * 1024


async def file_digest(path: Path) -> str:
    """Compute the SHA-256 hex digest of a file with chunked async reads.

    Raises:
        OSError: If the file cannot be read.
    """
    digest = hashlib.new(HASH_ALGORITHM)
    async with aiofiles.open(path, mode="rb") as f:
        while chunk := await f.read(CHUNK_SIZE):
            digest.update(chunk)
    return digest.hexdigest()


async def hash_candidate(ctx: RunContext, candidate: CandidateFile) -> str | None:
    """Compute and store a candidate's digest.

    A read failure is recorded as a HashFailure and leaves the digest
    unset; any backup of this file then proceeds unverified.

    Returns:
        The hex digest, or None if hashing failed.
    """
    if candidate.digest is not None:
        return candidate.digest

    try:
        candidate.digest = await file_digest(candidate.path)
    except OSError as e:
        ctx.fail(ErrorKind.HASH, f"cannot hash: {e}", str(candidate.path))
        return None

    ctx.metrics.hashes_generated += 1
    return candidate.digest
