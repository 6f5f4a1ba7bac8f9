"""Result models for drift checks."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from docgap.vcs.models import EffectiveUpdate


class VerificationStatus(str, Enum):
    FRESH = "FRESH"
    STALE_TIMESTAMP = "STALE_TIMESTAMP"
    STALE_SEMANTIC = "STALE_SEMANTIC"
    UNKNOWN = "UNKNOWN"


class DriftReason(str, Enum):
    TIMESTAMP_MISMATCH = "Timestamp mismatch"
    SEMANTIC_MISMATCH = "Semantic mismatch"


class CommitRef(BaseModel):
    model_config = ConfigDict(frozen=True)

    hash: str
    date: datetime
    message: str | None = None


class DriftingSource(BaseModel):
    """One source file that changed meaningfully after its document."""

    model_config = ConfigDict(frozen=True)

    source_file: str
    reason: DriftReason
    last_commit: EffectiveUpdate


class FileCheckResult(BaseModel):
    """Outcome of checking one document against its source files."""

    model_config = ConfigDict(frozen=True)

    doc_path: str
    source_files: list[str] = Field(default_factory=list)
    status: VerificationStatus
    last_doc_commit: CommitRef | None = None
    last_source_commit: CommitRef | None = None
    drift_reason: str | None = None
    drifting_sources: list[DriftingSource] = Field(default_factory=list)

    @property
    def is_stale(self) -> bool:
        return self.status in (VerificationStatus.STALE_TIMESTAMP, VerificationStatus.STALE_SEMANTIC)


def derive_status(has_doc_history: bool, drifting: list[DriftingSource]) -> VerificationStatus:
    """Status from doc history presence and the drifting sources found."""
    if not has_doc_history:
        return VerificationStatus.UNKNOWN
    if any(d.reason is DriftReason.SEMANTIC_MISMATCH for d in drifting):
        return VerificationStatus.STALE_SEMANTIC
    if drifting:
        return VerificationStatus.STALE_TIMESTAMP
    return VerificationStatus.FRESH
