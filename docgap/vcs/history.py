"""Resolves the last meaningful change of a file from its commit history."""

from __future__ import annotations

import logging

from docgap.config.models import DocGapConfig
from docgap.errors import DriftError, ErrorKind
from docgap.vcs.base import VCSBackend
from docgap.vcs.filter import compile_ignore_patterns, is_noise
from docgap.vcs.models import EffectiveUpdate

logger = logging.getLogger(__name__)


class CommitHistoryResolver:
    """Answers "when did this file last change for real?" for one backend."""

    def __init__(self, backend: VCSBackend) -> None:
        self.backend = backend
        # Only a positive answer is cached; a negative check is repeated next call
        self._is_repository = False

    async def _ensure_repository(self) -> None:
        if self._is_repository:
            return
        try:
            ok = await self.backend.is_repository()
        except Exception as e:
            raise DriftError(
                ErrorKind.HISTORY_FETCH_FAILED, "Failed to query repository state", cause=e
            ) from e
        if not ok:
            raise DriftError(
                ErrorKind.NOT_A_REPOSITORY, "Current directory is not a git repository"
            )
        self._is_repository = True

    async def effective_update(self, path: str, config: DocGapConfig) -> EffectiveUpdate | None:
        """Return the newest non-noise commit touching *path*, or None.

        None means either the file has no history yet or every commit on it
        was filtered out as noise.
        """
        # Bad user patterns should fail before any subprocess is spawned
        ignore = compile_ignore_patterns(config.git.ignore_commit_patterns)
        await self._ensure_repository()

        try:
            commits = await self.backend.log(path, follow=not config.git.shallow)
        except Exception as e:
            raise DriftError(
                ErrorKind.HISTORY_FETCH_FAILED,
                f"Failed to fetch commit history for {path}",
                path=path,
                cause=e,
            ) from e

        for commit in commits:
            if is_noise(commit.message, ignore):
                logger.debug("Ignoring noise commit %s on %s: %s", commit.hash[:8], path, commit.message)
                continue
            return EffectiveUpdate.from_commit(commit)

        logger.debug("No effective history for %s (%d commits seen)", path, len(commits))
        return None
