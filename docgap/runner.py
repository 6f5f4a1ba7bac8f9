"""Project-level entry point: expand rules and check every document."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from pathlib import Path

from docgap.config import DocGapConfig, load_config
from docgap.drift.detector import DriftDetector
from docgap.drift.models import FileCheckResult
from docgap.drift.rules import RuleExpander
from docgap.drift.scheduler import TaskScheduler
from docgap.vcs.filter import compile_ignore_patterns

logger = logging.getLogger(__name__)


async def run_analysis(
    root: str | Path = ".",
    config: DocGapConfig | None = None,
    scheduler: TaskScheduler | None = None,
) -> list[FileCheckResult]:
    """Check every (doc, sources) pair the rules produce under *root*.

    Results follow rule order, then document order. The first failing check
    cancels the rest and its DriftError propagates.
    """
    root = Path(root).resolve()
    if config is None:
        config = load_config(root)
    if scheduler is None:
        scheduler = TaskScheduler(config.concurrency)

    # Surface bad ignore regexes before any git work starts
    compile_ignore_patterns(config.git.ignore_commit_patterns)

    tasks = RuleExpander(root, config).expand()
    logger.debug("Expanded %d rule(s) into %d check(s)", len(config.rules), len(tasks))
    detector = DriftDetector.for_repository(root, config)

    results = await scheduler.run(
        (lambda t=task: detector.check(t.doc, list(t.sources), max_staleness=t.rule.max_staleness))
        for task in tasks
    )

    counts = Counter(r.status.value for r in results)
    logger.info(
        "Checked %d document(s): %s",
        len(results),
        ", ".join(f"{k}={v}" for k, v in sorted(counts.items())) or "nothing to check",
    )
    return results


def run_analysis_sync(
    root: str | Path = ".",
    config: DocGapConfig | None = None,
    scheduler: TaskScheduler | None = None,
) -> list[FileCheckResult]:
    return asyncio.run(run_analysis(root, config, scheduler))
