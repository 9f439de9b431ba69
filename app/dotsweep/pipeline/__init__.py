"""Per-candidate stages of a cleanup run.

Validation, hashing, backup and deletion run per candidate; analysis and
final validation run once per run.
"""

from dotsweep.pipeline.analyzer import analyze_candidates, classify_name, risk_score
from dotsweep.pipeline.backup import backup_candidate
from dotsweep.pipeline.executor import DeletionExecutor
from dotsweep.pipeline.final import final_validation
from dotsweep.pipeline.hasher import file_digest, hash_candidate
from dotsweep.pipeline.validator import validate_candidate

__all__ = [
    "DeletionExecutor",
    "analyze_candidates",
    "backup_candidate",
    "classify_name",
    "file_digest",
    "final_validation",
    "hash_candidate",
    "risk_score",
    "validate_candidate",
]
