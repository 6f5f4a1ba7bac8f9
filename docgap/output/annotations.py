"""GitHub Actions workflow-command annotations for drifting documents."""

from __future__ import annotations

from pathlib import Path

from docgap.drift.models import FileCheckResult, VerificationStatus
from docgap.output.render import relative_to_root


def escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_annotation(result: FileCheckResult, root: Path, strict: bool = False) -> str:
    level = "error" if strict else "warning"
    message = f"Documentation is stale. Reason: {result.drift_reason or 'Unknown'}"
    props = f"file={escape_property(relative_to_root(result.doc_path, root))},title={escape_property('Drift Detected')}"
    return f"::{level} {props}::{escape_data(message)}"


def format_annotations(results: list[FileCheckResult], root: Path, strict: bool = False) -> list[str]:
    """One annotation per document that is not FRESH."""
    return [
        format_annotation(r, root, strict)
        for r in results
        if r.status is not VerificationStatus.FRESH
    ]
