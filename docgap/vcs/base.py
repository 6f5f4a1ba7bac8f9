"""Abstract VCS interface for docgap."""

from abc import ABC, abstractmethod

from docgap.vcs.models import Commit


class VCSBackend(ABC):
    """Abstract base class for history backends.

    Any version-control system that can answer "which commits touched this
    path" and "what did this path contain at that revision" can drive the
    drift engine.
    """

    @abstractmethod
    async def is_repository(self) -> bool:
        """Return True if the working directory is under version control."""
        ...

    @abstractmethod
    async def log(self, path: str, follow: bool = False) -> list[Commit]:
        """List commits touching *path*, most recent first.

        Args:
            path: File path, absolute or relative to the backend root.
            follow: Track the file across renames (full history).
        """
        ...

    @abstractmethod
    async def show(self, path: str, revision: str) -> str:
        """Return the content of *path* as of *revision*.

        Raises whatever the backend raises if the path did not exist there.
        """
        ...
