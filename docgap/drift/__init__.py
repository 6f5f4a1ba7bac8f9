"""Drift detection - rule expansion, scheduling, and two-phase verification."""

from docgap.drift.detector import NO_DOC_HISTORY, DriftDetector, check_drift
from docgap.drift.models import (
    CommitRef,
    DriftingSource,
    DriftReason,
    FileCheckResult,
    VerificationStatus,
    derive_status,
)
from docgap.drift.rules import DriftTask, RuleExpander, matches_ignore
from docgap.drift.scheduler import DEFAULT_CONCURRENCY, TaskScheduler, gather_or_cancel

__all__ = [
    "DEFAULT_CONCURRENCY",
    "NO_DOC_HISTORY",
    "CommitRef",
    "DriftDetector",
    "DriftReason",
    "DriftTask",
    "DriftingSource",
    "FileCheckResult",
    "RuleExpander",
    "TaskScheduler",
    "VerificationStatus",
    "check_drift",
    "derive_status",
    "gather_or_cancel",
    "matches_ignore",
]
