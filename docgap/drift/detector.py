"""Two-phase drift verification for a document and its source files.

Phase 1 compares effective-update timestamps (noise commits removed). Only
sources that moved after the document reach phase 2, which fingerprints
the source as it is now and as it was at the document's commit. Matching
fingerprints mean the change was cosmetic and the source is not reported.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from pathlib import Path

from docgap.config.models import DocGapConfig
from docgap.content.normalizer import ContentNormalizer, create_normalizer
from docgap.content.snapshot import ContentSnapshotProvider
from docgap.drift.models import (
    CommitRef,
    DriftingSource,
    DriftReason,
    FileCheckResult,
    VerificationStatus,
    derive_status,
)
from docgap.drift.scheduler import gather_or_cancel
from docgap.vcs.git import GitBackend
from docgap.vcs.history import CommitHistoryResolver
from docgap.vcs.models import EffectiveUpdate

logger = logging.getLogger(__name__)

NO_DOC_HISTORY = "No git history found for documentation file"


def _summarize(drifting: list[DriftingSource], total: int, since: str) -> str:
    semantic = sum(1 for d in drifting if d.reason is DriftReason.SEMANTIC_MISMATCH)
    noun = "file" if total == 1 else "files"
    summary = f"{len(drifting)} of {total} source {noun} drifted since {since[:7]}"
    if semantic:
        summary += f" ({semantic} semantic)"
    return f"{summary}: " + ", ".join(d.source_file for d in drifting)


class DriftDetector:
    def __init__(
        self,
        resolver: CommitHistoryResolver,
        snapshots: ContentSnapshotProvider,
        normalizer: ContentNormalizer,
        config: DocGapConfig,
    ) -> None:
        self.resolver = resolver
        self.snapshots = snapshots
        self.normalizer = normalizer
        self.config = config

    @classmethod
    def for_repository(cls, root: str | Path, config: DocGapConfig) -> DriftDetector:
        """Wire up the default git-backed collaborators for *root*."""
        backend = GitBackend(root)
        return cls(
            resolver=CommitHistoryResolver(backend),
            snapshots=ContentSnapshotProvider(backend, root),
            normalizer=create_normalizer(config.semantic),
            config=config,
        )

    async def check(
        self, doc_path: str, source_files: list[str], max_staleness: int = 0
    ) -> FileCheckResult:
        t_doc = await self.resolver.effective_update(doc_path, self.config)
        if t_doc is None:
            return FileCheckResult(
                doc_path=doc_path,
                source_files=list(source_files),
                status=VerificationStatus.UNKNOWN,
                drift_reason=NO_DOC_HISTORY,
            )

        grace = timedelta(days=max_staleness)
        verdicts = await gather_or_cancel(
            self._evaluate_source(source, t_doc, grace) for source in source_files
        )
        drifting = [v for v in verdicts if v is not None]

        first = drifting[0].last_commit if drifting else None
        return FileCheckResult(
            doc_path=doc_path,
            source_files=list(source_files),
            status=derive_status(True, drifting),
            last_doc_commit=CommitRef(hash=t_doc.hash, date=t_doc.date),
            last_source_commit=(
                CommitRef(hash=first.hash, date=first.date, message=first.message) if first else None
            ),
            drift_reason=_summarize(drifting, len(source_files), t_doc.hash) if drifting else None,
            drifting_sources=drifting,
        )

    async def _evaluate_source(
        self, source: str, t_doc: EffectiveUpdate, grace: timedelta
    ) -> DriftingSource | None:
        t_code = await self.resolver.effective_update(source, self.config)
        if t_code is None:
            logger.debug("Skipping %s: no effective history", source)
            return None
        if t_code.date <= t_doc.date + grace:
            return None

        semantic = self.config.semantic
        if not semantic.enabled or semantic.strict:
            return DriftingSource(
                source_file=source, reason=DriftReason.TIMESTAMP_MISMATCH, last_commit=t_code
            )

        if await self._semantically_equal(source, t_doc.hash):
            logger.debug("%s changed after %s but only cosmetically", source, t_doc.hash[:7])
            return None
        return DriftingSource(
            source_file=source, reason=DriftReason.SEMANTIC_MISMATCH, last_commit=t_code
        )

    async def _semantically_equal(self, source: str, revision: str) -> bool:
        ext = Path(source).suffix
        current = await self.snapshots.current_content(source)
        previous = await self.snapshots.content_at_commit(source, revision)
        return (
            await self.normalizer.fingerprint(current, ext)
            == await self.normalizer.fingerprint(previous, ext)
        )


async def check_drift(
    doc_path: str,
    source_files: list[str],
    config: DocGapConfig,
    root: str | Path = ".",
    max_staleness: int = 0,
) -> FileCheckResult:
    """Check one document against its sources in the git repository at *root*."""
    detector = DriftDetector.for_repository(root, config)
    return await detector.check(doc_path, source_files, max_staleness=max_staleness)
