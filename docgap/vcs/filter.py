"""Commit-message noise filtering."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from docgap.errors import DriftError, ErrorKind
from docgap.vcs.models import Commit

# Conventional-commit prefixes that never describe a behavioural change
NOISE_PATTERN = re.compile(r"^(chore|style|test|ci|build)(\(.*\))?:", re.IGNORECASE)


def compile_ignore_patterns(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile user-supplied ignore regexes, failing loudly on a bad one."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise DriftError(
                ErrorKind.INVALID_PATTERN,
                f"Invalid commit ignore pattern {pattern!r}",
                cause=e,
            ) from e
    return compiled


def is_noise(message: str, ignore: Sequence[re.Pattern[str]] = ()) -> bool:
    if NOISE_PATTERN.search(message):
        return True
    return any(regex.search(message) for regex in ignore)


def filter_meaningful_commits(
    commits: Iterable[Commit], ignore_patterns: Iterable[str] = ()
) -> list[Commit]:
    """Drop noise commits, keeping the order and multiplicity of the rest."""
    ignore = compile_ignore_patterns(ignore_patterns)
    return [c for c in commits if not is_noise(c.message, ignore)]
