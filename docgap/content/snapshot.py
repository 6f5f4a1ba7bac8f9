"""Working-tree and historical file content."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from docgap.errors import DriftError, ErrorKind
from docgap.vcs.base import VCSBackend

logger = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


class ContentSnapshotProvider:
    """Reads a file as it is now, or as it was at a given revision."""

    def __init__(self, backend: VCSBackend, root: str | Path = ".") -> None:
        self.backend = backend
        self.root = Path(root)

    async def current_content(self, path: str | Path) -> str:
        """Working-tree content; relative paths resolve against the root."""
        try:
            return await asyncio.to_thread(_read_text, self.root / path)
        except OSError as e:
            raise DriftError(
                ErrorKind.READ_FAILED, f"Cannot read {path}", path=str(path), cause=e
            ) from e

    async def content_at_commit(self, path: str | Path, revision: str) -> str:
        """Content of *path* at *revision*, or "" if it did not exist there.

        A missing file reads as empty so the comparison can still run; a file
        created after *revision* therefore always compares as changed.
        """
        try:
            return await self.backend.show(str(path), revision)
        except Exception as e:
            logger.debug("No content for %s at %s, treating as empty: %s", path, revision[:8], e)
            return ""
