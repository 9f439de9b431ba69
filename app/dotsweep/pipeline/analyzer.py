"""Pattern classification and risk scoring.

Classification looks only at the filename. The risk score estimates how
likely an artifact is to hold something meaningful rather than
disposable, from its category, size and age.
"""

import logging
import re
import time

from dotsweep.core.context import RunContext
from dotsweep.models.candidate import CandidateFile, CandidateStatus, PatternCategory
from dotsweep.models.trend import CandidateMetrics

logger = logging.getLogger(__name__)

KIB = 1024
MIB = 1024 * KIB
HOUR = 3600.0
DAY = 24 * HOUR

# Checked in order; the first match wins.
_CATEGORY_RULES: tuple[tuple[PatternCategory, re.Pattern[str]], ...] = (
    (PatternCategory.SWAP, re.compile(r"[.!]sw[a-px](?:[.!]|$)|swap", re.IGNORECASE)),
    (PatternCategory.LOCK, re.compile(r"lock|[.!]lck(?:[.!]|$)", re.IGNORECASE)),
    (PatternCategory.CACHE, re.compile(r"cache", re.IGNORECASE)),
    (
        PatternCategory.TEMP,
        re.compile(r"[.!~]te?mp(?:[.!]|$)|[.!]part(?:ial)?$|\.crdownload$", re.IGNORECASE),
    ),
)

_CATEGORY_BASE: dict[PatternCategory, int] = {
    PatternCategory.SWAP: 40,
    PatternCategory.UNKNOWN: 35,
    PatternCategory.LOCK: 20,
    PatternCategory.TEMP: 15,
    PatternCategory.CACHE: 10,
}


def classify_name(name: str) -> PatternCategory:
    """Classify an artifact basename.

    >>> classify_name(".notes.txt!swp")
    <PatternCategory.SWAP: 'swap'>
    >>> classify_name(".!1234!report.pdf")
    <PatternCategory.UNKNOWN: 'unknown'>
    """
    for category, rule in _CATEGORY_RULES:
        if rule.search(name):
            return category
    return PatternCategory.UNKNOWN


def risk_score(category: PatternCategory, size: int, age_seconds: float) -> int:
    """Score an artifact from 0 (disposable) to 100 (likely meaningful)."""
    score = _CATEGORY_BASE[category]

    if size >= 10 * MIB:
        score += 30
    elif size >= MIB:
        score += 20
    elif size >= 100 * KIB:
        score += 10

    if age_seconds < HOUR:
        score += 20
    elif age_seconds < DAY:
        score += 10
    elif age_seconds >= 30 * DAY:
        score -= 10

    return max(0, min(100, score))


def analyze_candidates(ctx: RunContext, now: float | None = None) -> list[CandidateMetrics]:
    """Classify and score every candidate that passed validation.

    Updates the run's pattern set and risk histogram according to the
    configuration switches.

    Returns:
        Per-file metrics for the trend collector.
    """
    if now is None:
        now = time.time()

    config = ctx.config
    analysed: list[CandidateMetrics] = []

    for candidate in ctx.candidates:
        if not candidate.validated:
            continue

        category = classify_name(candidate.name)
        candidate.category = category
        size = candidate.size or 0
        age = max(0.0, now - (candidate.mtime or now))

        if config.enable_pattern_analysis:
            ctx.metrics.patterns.add(category)

        if config.enable_risk_assessment:
            candidate.risk_score = risk_score(category, size, age)
            ctx.metrics.risk_assessment.add(candidate.risk_score)

        analysed.append(
            CandidateMetrics(
                path=str(candidate.path),
                size=size,
                age_seconds=age,
                category=category,
                risk_score=candidate.risk_score,
                removed=_removed(candidate),
            )
        )

    logger.debug("Analysed %d candidates", len(analysed))
    return analysed


def _removed(candidate: CandidateFile) -> bool:
    return candidate.status in (CandidateStatus.DELETED, CandidateStatus.WOULD_DELETE)
