"""Git backend driven through asyncio subprocesses."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime
from pathlib import Path

from docgap.vcs.base import VCSBackend
from docgap.vcs.models import Commit

logger = logging.getLogger(__name__)

# Unit/record separators keep commit subjects with "|" or newlines intact
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"--format=%H{_FIELD_SEP}%aI{_FIELD_SEP}%an{_FIELD_SEP}%s{_RECORD_SEP}"

GitRunner = Callable[[Sequence[str], Path], Awaitable[str]]


class GitCommandError(Exception):
    """A git invocation exited non-zero or could not be started."""

    def __init__(self, args: Sequence[str], returncode: int | None, stderr: str) -> None:
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        cmd = " ".join(["git", *self.args_list])
        super().__init__(f"`{cmd}` failed ({returncode}): {stderr}")


async def _default_runner(args: Sequence[str], cwd: Path) -> str:
    try:
        proc = await asyncio.create_subprocess_exec(
            "git",
            *args,
            cwd=str(cwd),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise GitCommandError(args, None, str(e)) from e
    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        raise GitCommandError(args, proc.returncode, stderr.decode("utf-8", errors="replace").strip())
    return stdout.decode("utf-8", errors="replace")


def parse_log(output: str) -> list[Commit]:
    """Parse output produced with ``_LOG_FORMAT`` into commits, newest first."""
    commits: list[Commit] = []
    for record in output.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record.strip():
            continue
        parts = record.split(_FIELD_SEP)
        if len(parts) != 4:
            logger.debug("Skipping malformed log record: %r", record)
            continue
        sha, date, author, subject = parts
        commits.append(
            Commit(
                hash=sha.strip(),
                date=datetime.fromisoformat(date.strip()),
                author=author,
                message=subject,
            )
        )
    return commits


class GitBackend(VCSBackend):
    """VCSBackend over the ``git`` executable rooted at a working directory."""

    def __init__(self, root: str | Path = ".", runner: GitRunner | None = None) -> None:
        self.root = Path(root).resolve()
        self._runner = runner or _default_runner

    async def _git(self, *args: str) -> str:
        logger.debug("git %s (cwd=%s)", " ".join(args), self.root)
        return await self._runner(args, self.root)

    async def is_repository(self) -> bool:
        try:
            out = await self._git("rev-parse", "--is-inside-work-tree")
        except GitCommandError as e:
            if e.returncode is None:
                # git itself is missing; let the caller treat it as a fetch failure
                raise
            return False
        return out.strip() == "true"

    async def log(self, path: str, follow: bool = False) -> list[Commit]:
        args = ["log", _LOG_FORMAT]
        if follow:
            args.append("--follow")
        args.extend(["--", str(path)])
        return parse_log(await self._git(*args))

    async def show(self, path: str, revision: str) -> str:
        return await self._git("show", f"{revision}:./{self._relative(path)}")

    def _relative(self, path: str) -> str:
        p = Path(path)
        if not p.is_absolute():
            return p.as_posix()
        try:
            return p.resolve().relative_to(self.root).as_posix()
        except ValueError as e:
            raise GitCommandError(["show", str(path)], None, f"{path} is outside {self.root}") from e
