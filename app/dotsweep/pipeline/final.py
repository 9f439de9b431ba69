"""Post-run re-scan confirming no artifacts were left behind."""

from collections.abc import Sequence

from dotsweep.core.context import RunContext
from dotsweep.core.errors import DiscoveryError
from dotsweep.models.candidate import CandidateStatus
from dotsweep.models.metrics import ErrorKind
from dotsweep.scanners.base import Scanner
from dotsweep.scanners.dedup import SeenPathSet

# Files the run deliberately left on disk
_KEPT_ON_PURPOSE = (CandidateStatus.SKIPPED, CandidateStatus.RETAINED)


async def final_validation(ctx: RunContext, scanners: Sequence[Scanner]) -> bool:
    """Re-scan the target and check that nothing unexpected remains.

    Skipped in dry-run. Candidates that policy rejected, and originals
    retained because their backup failed, are expected to remain and are
    not counted. Anything else found is recorded as a
    FinalValidationFailure.

    Returns:
        True if validation passed or was skipped.
    """
    if ctx.config.dry_run:
        ctx.info("Final validation skipped", reason="dry run")
        return True

    kept = {candidate.path for candidate in ctx.candidates if candidate.status in _KEPT_ON_PURPOSE}
    seen = SeenPathSet()
    remaining: list[str] = []
    rescanned = False

    for scanner in scanners:
        if not scanner.is_available():
            continue
        try:
            paths = await scanner.scan(ctx.config)
        except (DiscoveryError, OSError) as e:
            ctx.warn("Final re-scan strategy failed", strategy=scanner.name, error=str(e))
            continue
        rescanned = True
        remaining.extend(str(path) for path in seen.admit(paths) if path not in kept)

    if not rescanned:
        ctx.fail(ErrorKind.FINAL_VALIDATION, "no discovery strategy could re-scan the target")
        return False

    ctx.metrics.remaining_artifacts = remaining
    if remaining:
        ctx.fail(
            ErrorKind.FINAL_VALIDATION,
            f"{len(remaining)} artifact(s) remain after cleanup: {', '.join(remaining[:5])}",
        )
        return False

    ctx.info("Final validation passed", retained=len(kept))
    return True
