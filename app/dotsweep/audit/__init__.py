"""Audit trail recording."""

from dotsweep.audit.recorder import AuditRecorder

__all__ = ["AuditRecorder"]
