"""Semantic fingerprinting of source text.

Two interchangeable strategies sit behind :class:`ContentNormalizer`:

* :class:`RegexNormalizer` strips comments and whitespace with regular
  expressions keyed on the file extension.
* :class:`ExternalNormalizer` shells out to a code-compression tool
  (repomix by default) and pulls the canonical text out of its XML output.

Both produce text where comment-only and whitespace-only edits vanish, and
both are idempotent: normalizing normalized text returns it unchanged.
"""

from __future__ import annotations

import asyncio
import contextlib
import hashlib
import logging
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from docgap.config.models import SemanticConfig
from docgap.errors import DriftError, ErrorKind

logger = logging.getLogger(__name__)

# Languages whose line comments start with '#'. '//' is left alone for
# these since it is an operator in several of them (floor division in Python).
HASH_COMMENT_EXTENSIONS = {
    ".py", ".pyi", ".rb", ".sh", ".bash", ".zsh", ".pl", ".r",
    ".yaml", ".yml", ".toml", ".cfg", ".ini", ".cmake",
}

_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
# Single-line string literals are matched first and kept, so comment
# markers inside them ("issue #1", "Hello #{name}") survive.
_STRING_LITERAL = r"\"(?:\\.|[^\"\\\n])*\"|'(?:\\.|[^'\\\n])*'"
# '//' not preceded by ':' so http://... survives
_SLASH_COMMENT_RE = re.compile(rf"({_STRING_LITERAL})|(?<!:)//.*$", re.MULTILINE)
# '#' at line start or after whitespace, so a#b survives
_HASH_COMMENT_RE = re.compile(rf"({_STRING_LITERAL})|(?<!\S)#.*$", re.MULTILINE)
_WHITESPACE_RE = re.compile(r"\s+")


def _keep_strings(match: re.Match[str]) -> str:
    return match.group(1) or ""


def _uses_hash_comments(extension: str) -> bool:
    return extension.lower() in HASH_COMMENT_EXTENSIONS


def strip_comments(text: str, extension: str = "") -> str:
    """Remove comments but keep line structure, so line numbers stay valid."""
    if _uses_hash_comments(extension):
        return _HASH_COMMENT_RE.sub(_keep_strings, text)
    text = _BLOCK_COMMENT_RE.sub(lambda m: "\n" * m.group(0).count("\n"), text)
    return _SLASH_COMMENT_RE.sub(_keep_strings, text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_content(text: str, extension: str = "") -> str:
    """Canonical form: comments stripped, whitespace runs collapsed, trimmed."""
    previous = None
    # Removing one comment can expose another token pair; run to a fixed point.
    while previous != text:
        previous = text
        text = collapse_whitespace(strip_comments(text, extension))
    return text


def hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class ContentNormalizer(ABC):
    """Produces a canonical form and a SHA-256 fingerprint of source text."""

    name: str = "base"

    @abstractmethod
    async def normalize(self, text: str, extension: str = "") -> str:
        ...

    async def fingerprint(self, text: str, extension: str = "") -> str:
        return hash_text(await self.normalize(text, extension))


class RegexNormalizer(ContentNormalizer):
    name = "regex"

    async def normalize(self, text: str, extension: str = "") -> str:
        return clean_content(text, extension)


_ENVELOPE_RE = re.compile(r"<file path=\"[^\"]*\">\n?(.*?)\n?</file>", re.DOTALL)


def extract_envelope(packed: str) -> str | None:
    """Pull the file body out of repomix-style XML output."""
    bodies = _ENVELOPE_RE.findall(packed)
    if not bodies:
        return None
    return "\n".join(bodies)


class ExternalNormalizer(ContentNormalizer):
    """Delegates canonicalization to an external code-compression command.

    The text is written to a fresh temporary directory per call; the
    command is given that directory and an output file path. ``{input}`` and
    ``{output}`` placeholders in the command are substituted, otherwise
    ``--output <file> <dir>`` is appended. The directory is removed on
    every exit path.
    """

    name = "external"

    def __init__(self, command: list[str], timeout: float = 30.0) -> None:
        if not command:
            raise ValueError("External normalizer command must not be empty")
        self.command = list(command)
        self.timeout = timeout

    def _argv(self, input_dir: Path, output: Path) -> list[str]:
        if any("{input}" in a or "{output}" in a for a in self.command):
            return [a.format(input=input_dir, output=output) for a in self.command]
        return [*self.command, "--output", str(output), str(input_dir)]

    async def normalize(self, text: str, extension: str = "") -> str:
        with tempfile.TemporaryDirectory(prefix="docgap-") as tmp:
            input_dir = Path(tmp) / "input"
            input_dir.mkdir()
            (input_dir / f"snippet{extension or '.txt'}").write_text(text, encoding="utf-8")
            output = Path(tmp) / "packed.xml"
            argv = self._argv(input_dir, output)
            await self._run(argv)

            try:
                packed = output.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise DriftError(
                    ErrorKind.NORMALIZATION_FAILED, f"{argv[0]} produced no output file", cause=e
                ) from e

        body = extract_envelope(packed)
        if body is None:
            raise DriftError(
                ErrorKind.NORMALIZATION_FAILED, f"No <file> envelope in {argv[0]} output"
            )
        return collapse_whitespace(body)

    async def _run(self, argv: list[str]) -> None:
        logger.debug("Running external normalizer: %s", " ".join(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise DriftError(
                ErrorKind.NORMALIZATION_FAILED, f"Cannot start {argv[0]}", cause=e
            ) from e

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise DriftError(
                ErrorKind.NORMALIZATION_FAILED, f"{argv[0]} timed out after {self.timeout}s", cause=e
            ) from e
        finally:
            # Timeout or cancellation: the child must not outlive its scratch dir
            if proc.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    proc.kill()
                await proc.wait()

        if proc.returncode != 0:
            raise DriftError(
                ErrorKind.NORMALIZATION_FAILED,
                f"{argv[0]} exited {proc.returncode}: {stderr.decode(errors='replace')[:200]}",
            )


def create_normalizer(config: SemanticConfig) -> ContentNormalizer:
    """Build the normalizer selected in the semantic config."""
    if config.normalizer == "external":
        return ExternalNormalizer(config.external_command, timeout=config.timeout)
    return RegexNormalizer()
