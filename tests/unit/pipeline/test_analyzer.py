"""Unit tests for pattern classification and risk scoring."""

from pathlib import Path

import pytest
from dotsweep.core.config import RunConfig
from dotsweep.core.context import RunContext
from dotsweep.models.candidate import CandidateFile, CandidateStatus, PatternCategory
from dotsweep.pipeline.analyzer import (
    DAY,
    HOUR,
    KIB,
    MIB,
    analyze_candidates,
    classify_name,
    risk_score,
)

NOW = 1_700_000_000.0


class TestClassifyName:
    """Tests for classify_name function."""

    @pytest.mark.parametrize(
        "name,category",
        [
            (".notes.txt!swp", PatternCategory.SWAP),
            (".main.py!swo", PatternCategory.SWAP),
            (".!swapfile", PatternCategory.SWAP),
            (".~lock.report.odt!", PatternCategory.LOCK),
            (".db!lck", PatternCategory.LOCK),
            (".thumbs!cache", PatternCategory.CACHE),
            (".upload!tmp", PatternCategory.TEMP),
            (".video.mp4!part", PatternCategory.TEMP),
            (".!1234!report.pdf", PatternCategory.UNKNOWN),
        ],
    )
    def test_categories(self, name: str, category: PatternCategory) -> None:
        """Names map to their category."""
        assert classify_name(name) == category

    def test_first_rule_wins(self) -> None:
        """A name matching several rules takes the earliest category."""
        assert classify_name(".cache!swp") == PatternCategory.SWAP


class TestRiskScore:
    """Tests for risk_score function."""

    def test_category_base(self) -> None:
        """Small files of middling age score their category base."""
        age = 2 * DAY
        assert risk_score(PatternCategory.SWAP, 0, age) == 40
        assert risk_score(PatternCategory.UNKNOWN, 0, age) == 35
        assert risk_score(PatternCategory.LOCK, 0, age) == 20
        assert risk_score(PatternCategory.TEMP, 0, age) == 15
        assert risk_score(PatternCategory.CACHE, 0, age) == 10

    @pytest.mark.parametrize(
        "size,bump",
        [(100 * KIB - 1, 0), (100 * KIB, 10), (MIB, 20), (10 * MIB, 30)],
    )
    def test_size_bumps(self, size: int, bump: int) -> None:
        """Larger files score higher."""
        assert risk_score(PatternCategory.CACHE, size, 2 * DAY) == 10 + bump

    def test_age_adjustments(self) -> None:
        """Young files score higher, very old files lower."""
        assert risk_score(PatternCategory.TEMP, 0, HOUR - 1) == 35
        assert risk_score(PatternCategory.TEMP, 0, DAY - 1) == 25
        assert risk_score(PatternCategory.TEMP, 0, 30 * DAY) == 5

    def test_clamped(self) -> None:
        """Scores stay within 0..100."""
        assert risk_score(PatternCategory.SWAP, 50 * MIB, 0) == 90
        assert 0 <= risk_score(PatternCategory.CACHE, 0, 365 * DAY) <= 100


class TestAnalyzeCandidates:
    """Tests for analyze_candidates function."""

    def _context(self, config: RunConfig) -> RunContext:
        ctx = RunContext.create(config)
        ctx.candidates = [
            CandidateFile(
                path=Path("/p/.a!swp"),
                strategy="walk",
                size=10,
                mtime=NOW - 2 * DAY,
                status=CandidateStatus.DELETED,
            ),
            CandidateFile(
                path=Path("/p/.b!lock"),
                strategy="walk",
                size=20 * MIB,
                mtime=NOW - 60,
                status=CandidateStatus.RETAINED,
            ),
            CandidateFile(
                path=Path("/p/.c!tmp"),
                strategy="walk",
                status=CandidateStatus.SKIPPED,
            ),
        ]
        return ctx

    def test_scores_validated_candidates(self, run_config: RunConfig) -> None:
        """Only validated candidates are classified and scored."""
        ctx = self._context(run_config)

        results = analyze_candidates(ctx, now=NOW)

        assert [r.path for r in results] == ["/p/.a!swp", "/p/.b!lock"]
        assert [r.removed for r in results] == [True, False]
        assert ctx.metrics.patterns == {PatternCategory.SWAP, PatternCategory.LOCK}
        assert ctx.metrics.risk_assessment.to_dict() == {"low": 0, "medium": 1, "high": 1}
        assert ctx.candidates[0].risk_score == 40
        assert ctx.candidates[1].risk_score == 70
        assert ctx.candidates[2].category is None

    def test_switches_disable_analysis(self, run_config: RunConfig) -> None:
        """Disabled switches leave patterns and risk untouched."""
        config = run_config.with_overrides(
            enable_pattern_analysis=False, enable_risk_assessment=False
        )
        ctx = self._context(config)

        results = analyze_candidates(ctx, now=NOW)

        assert len(results) == 2
        assert ctx.metrics.patterns == set()
        assert ctx.metrics.risk_assessment.total == 0
        assert results[0].risk_score is None
