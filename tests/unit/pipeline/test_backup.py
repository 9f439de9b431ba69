"""Unit tests for verified backups."""

import hashlib
from pathlib import Path

import pytest
from dotsweep.core.config import RunConfig
from dotsweep.core.context import RunContext
from dotsweep.models.candidate import CandidateFile
from dotsweep.models.metrics import ErrorKind
from dotsweep.pipeline.backup import backup_candidate, backup_path_for


def _artifact(target: Path, content: bytes = b"original") -> CandidateFile:
    path = target / ".a!swp"
    path.write_bytes(content)
    return CandidateFile(
        path=path,
        strategy="walk",
        size=len(content),
        digest=hashlib.sha256(content).hexdigest(),
    )


class TestBackupPathFor:
    """Tests for backup_path_for function."""

    def test_sits_next_to_original(self) -> None:
        """The backup lives beside the original with a tagged name."""
        candidate = CandidateFile(path=Path("/p/.a!swp"), strategy="walk", digest="deadbeef00")

        assert backup_path_for(candidate, epoch_ms=42) == Path("/p/.a!swp.backup.42.hash-deadbeef")


class TestBackupCandidate:
    """Tests for backup_candidate function."""

    @pytest.mark.asyncio
    async def test_verified_copy(self, run_config: RunConfig, target: Path) -> None:
        """A matching copy is kept and recorded."""
        ctx = RunContext.create(run_config)
        candidate = _artifact(target)

        assert await backup_candidate(ctx, candidate) is True

        assert candidate.backup is not None
        assert candidate.backup.verification_hash == candidate.digest
        assert Path(candidate.backup.backup_path).read_bytes() == b"original"
        assert candidate.path.exists()
        assert ctx.metrics.files_backed_up == 1

    @pytest.mark.asyncio
    async def test_unverified_copy_without_digest(
        self, run_config: RunConfig, target: Path
    ) -> None:
        """Without a digest the copy is accepted unverified."""
        ctx = RunContext.create(run_config)
        candidate = _artifact(target)
        candidate.digest = None

        assert await backup_candidate(ctx, candidate) is True

        assert candidate.backup is not None
        assert candidate.backup.verification_hash is None
        assert ".hash-" not in candidate.backup.backup_path

    @pytest.mark.asyncio
    async def test_mismatch_discards_copy(
        self, run_config: RunConfig, target: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A copy whose digest differs is removed again."""

        async def corrupt_copy(src: Path, dst: Path) -> None:
            Path(dst).write_bytes(b"garbage")

        monkeypatch.setattr("dotsweep.pipeline.backup._copy_file", corrupt_copy)
        ctx = RunContext.create(run_config)
        candidate = _artifact(target)

        assert await backup_candidate(ctx, candidate) is False

        assert candidate.backup is None
        assert list(target.iterdir()) == [candidate.path]
        assert [e.kind for e in ctx.metrics.errors] == [ErrorKind.BACKUP_INTEGRITY]

    @pytest.mark.asyncio
    async def test_copy_failure(
        self, run_config: RunConfig, target: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A failed copy is a BackupFailure."""

        async def failing_copy(src: Path, dst: Path) -> None:
            raise OSError(28, "No space left on device")

        monkeypatch.setattr("dotsweep.pipeline.backup._copy_file", failing_copy)
        ctx = RunContext.create(run_config)
        candidate = _artifact(target)

        assert await backup_candidate(ctx, candidate) is False
        assert [e.kind for e in ctx.metrics.errors] == [ErrorKind.BACKUP]
        assert ctx.metrics.files_backed_up == 0

    @pytest.mark.asyncio
    async def test_dry_run_writes_nothing(self, run_config: RunConfig, target: Path) -> None:
        """Dry runs report success without copying."""
        ctx = RunContext.create(run_config.with_overrides(dry_run=True))
        candidate = _artifact(target)

        assert await backup_candidate(ctx, candidate) is True
        assert list(target.iterdir()) == [candidate.path]
        assert candidate.backup is None
