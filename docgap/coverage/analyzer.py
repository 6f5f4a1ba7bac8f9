"""Entity extraction and documentation coverage scoring."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from docgap.content.normalizer import strip_comments
from docgap.coverage.languages import LanguageProfile, get_profile
from docgap.coverage.models import CoverageReport, Entity
from docgap.errors import DriftError, ErrorKind

logger = logging.getLogger(__name__)


class CoverageAnalyzer:
    """Scores how much of each source file's public surface a document names."""

    @staticmethod
    def extract_entities(code: str, profile: LanguageProfile) -> list[Entity]:
        """Find classes and functions in *code*, ordered by position.

        Each (name, kind) pair is reported once, at its first occurrence.
        """
        found: list[tuple[int, Entity]] = []
        seen: set[tuple[str, str]] = set()
        groups = (("class", profile.class_patterns), ("function", profile.function_patterns))
        for kind, patterns in groups:
            for pattern in patterns:
                for match in pattern.finditer(code):
                    name = match.group("name")
                    if name in profile.excluded_names or (name, kind) in seen:
                        continue
                    seen.add((name, kind))
                    offset = match.start("name")
                    line = code.count("\n", 0, offset) + 1
                    found.append((offset, Entity(name=name, kind=kind, line=line)))
        found.sort(key=lambda item: item[0])
        return [entity for _, entity in found]

    @staticmethod
    def score(present: list[Entity], missing: list[Entity]) -> float:
        total = len(present) + len(missing)
        if total == 0:
            return 1.0
        return len(present) / total

    async def analyze_file(self, path: str | Path, doc_text: str) -> CoverageReport:
        path = Path(path)
        profile = get_profile(path.suffix)
        if profile is None:
            logger.debug("No language profile for %s; scoring 0", path)
            return CoverageReport(file=str(path), score=0.0)

        try:
            code = await asyncio.to_thread(path.read_text, encoding="utf-8", errors="replace")
        except OSError as e:
            raise DriftError(ErrorKind.READ_FAILED, f"Cannot read {path}", path=str(path), cause=e) from e

        entities = self.extract_entities(strip_comments(code, path.suffix), profile)
        present = [e for e in entities if e.name in doc_text]
        missing = [e for e in entities if e.name not in doc_text]
        return CoverageReport(
            file=str(path),
            score=self.score(present, missing),
            present=present,
            missing=missing,
        )

    async def analyze(self, source_files: Iterable[str | Path], doc_text: str) -> list[CoverageReport]:
        """One report per source file, in the order given."""
        return [await self.analyze_file(path, doc_text) for path in source_files]


async def analyze_coverage(source_files: Iterable[str | Path], doc_text: str) -> list[CoverageReport]:
    return await CoverageAnalyzer().analyze(source_files, doc_text)
