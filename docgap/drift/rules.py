"""Expansion of configured rules into concrete (doc, sources) checks."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath

from docgap.config.models import DocGapConfig, RuleConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DriftTask:
    """One document and the source files it must be checked against."""

    doc: str
    sources: tuple[str, ...]
    rule: RuleConfig


def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/") if pattern != "/" else pattern


def _has_magic(pattern: str) -> bool:
    return any(c in pattern for c in "*?[")


def matches_ignore(rel_path: str, pattern: str) -> bool:
    """True if *rel_path* (posix, relative to root) is excluded by *pattern*.

    A bare name excludes any path containing that component and a plain
    path excludes everything beneath it. Glob patterns are matched against
    the whole path, with ``**/`` also allowed to match zero directories.
    """
    pattern = _normalize_pattern(pattern)
    if not pattern:
        return False
    rel = PurePosixPath(rel_path)
    if pattern in rel.parts:
        return True
    if not _has_magic(pattern) and rel_path.startswith(pattern + "/"):
        return True
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return rel_path == prefix or rel_path.startswith(prefix + "/")
    if fnmatch(rel_path, pattern):
        return True
    if "**/" in pattern and fnmatch(rel_path, pattern.replace("**/", "")):
        return True
    return False


def is_ignored(rel_path: str, patterns: Sequence[str]) -> bool:
    return any(matches_ignore(rel_path, p) for p in patterns)


class RuleExpander:
    """Turns glob-based rules into DriftTasks under a project root."""

    def __init__(self, root: str | Path, config: DocGapConfig) -> None:
        self.root = Path(root).resolve()
        self.config = config

    def _glob(self, patterns: Iterable[str], ignore: Sequence[str]) -> list[str]:
        found: set[str] = set()
        for pattern in patterns:
            pattern = _normalize_pattern(pattern)
            if not pattern:
                continue
            for path in self.root.glob(pattern):
                if not path.is_file():
                    continue
                rel = path.relative_to(self.root).as_posix()
                if is_ignored(rel, ignore):
                    continue
                found.add(str(path))
        return sorted(found)

    def expand_rule(self, rule: RuleConfig) -> list[DriftTask]:
        global_ignore = list(self.config.ignore)
        docs = self._glob([rule.doc], global_ignore)
        if not docs:
            logger.warning("Rule doc pattern %r matched no files", rule.doc)

        tasks: list[DriftTask] = []
        matched = self._glob(rule.source_patterns, [*rule.ignore, *global_ignore]) if docs else []
        for doc in docs:
            sources = [s for s in matched if s != doc]
            if not sources:
                logger.debug("No source files for %s under rule %r", doc, rule.doc)
            tasks.append(DriftTask(doc=doc, sources=tuple(sources), rule=rule))
        return tasks

    def expand(self) -> list[DriftTask]:
        """All tasks in rule order, then document order within each rule."""
        tasks: list[DriftTask] = []
        for rule in self.config.rules:
            tasks.extend(self.expand_rule(rule))
        return tasks
