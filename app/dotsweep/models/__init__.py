"""Data models for dotsweep.

This module exports the core data structures used throughout the application.
"""

from dotsweep.models.audit import AuditEntry, AuditLevel, create_audit_entry
from dotsweep.models.candidate import (
    BackupRecord,
    CandidateFile,
    CandidateStatus,
    PatternCategory,
    RiskLevel,
)
from dotsweep.models.metrics import ErrorKind, RiskHistogram, RunError, RunMetrics, RunStatus
from dotsweep.models.trend import CandidateMetrics, TrendAnalysis, TrendDirection, TrendSummary

__all__ = [
    "AuditEntry",
    "AuditLevel",
    "BackupRecord",
    "CandidateFile",
    "CandidateMetrics",
    "CandidateStatus",
    "ErrorKind",
    "PatternCategory",
    "RiskHistogram",
    "RiskLevel",
    "RunError",
    "RunMetrics",
    "RunStatus",
    "TrendAnalysis",
    "TrendDirection",
    "TrendSummary",
    "create_audit_entry",
]
