"""Rich rendering and JSON export of check and coverage results."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console
from rich.table import Table

from docgap.coverage.models import CoverageReport
from docgap.drift.models import FileCheckResult, VerificationStatus

_STATUS_STYLE = {
    VerificationStatus.FRESH: "green",
    VerificationStatus.STALE_TIMESTAMP: "yellow",
    VerificationStatus.STALE_SEMANTIC: "bold red",
    VerificationStatus.UNKNOWN: "dim",
}


def relative_to_root(path: str, root: Path) -> str:
    """Show *path* relative to *root* when it lives underneath it."""
    try:
        return Path(path).resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path


def render_results(results: list[FileCheckResult], root: Path, console: Console) -> None:
    table = Table(title=f"Documentation drift ({len(results)} checked)")
    table.add_column("Status", no_wrap=True)
    table.add_column("Doc File", style="cyan")
    table.add_column("Source")
    table.add_column("Reason", overflow="fold")
    for r in results:
        style = _STATUS_STYLE[r.status]
        if r.drifting_sources:
            sources = [relative_to_root(d.source_file, root) for d in r.drifting_sources]
        else:
            sources = [relative_to_root(s, root) for s in r.source_files]
        shown = ", ".join(sources[:3]) + (f" (+{len(sources) - 3})" if len(sources) > 3 else "")
        table.add_row(
            f"[{style}]{r.status.value}[/{style}]",
            relative_to_root(r.doc_path, root),
            shown or "-",
            r.drift_reason or "",
        )
    console.print(table)


def render_summary(results: list[FileCheckResult], console: Console) -> None:
    drifting = sum(1 for r in results if r.status is not VerificationStatus.FRESH)
    if drifting:
        console.print(f"\n[yellow][!] Found {drifting} drifting document(s).[/yellow]")
    else:
        console.print("\n[green]All documentation is up to date![/green]")


def render_coverage(reports: list[CoverageReport], root: Path, console: Console) -> None:
    table = Table(title="Documentation coverage")
    table.add_column("File", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Entities", justify="right")
    table.add_column("Missing", overflow="fold")
    for rep in reports:
        pct = rep.score * 100
        style = "green" if pct >= 80 else "yellow" if pct >= 50 else "red"
        table.add_row(
            relative_to_root(rep.file, root),
            f"[{style}]{pct:.0f}%[/{style}]",
            str(rep.total),
            ", ".join(e.name for e in rep.missing) or "-",
        )
    console.print(table)


def _relativize(data: dict, keys: tuple[str, ...], root: Path) -> dict:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str):
            data[key] = relative_to_root(value, root)
        elif isinstance(value, list):
            data[key] = [relative_to_root(v, root) if isinstance(v, str) else v for v in value]
    return data


def results_to_json(results: list[FileCheckResult], root: Path) -> str:
    payload = []
    for r in results:
        data = r.model_dump(mode="json")
        _relativize(data, ("doc_path", "source_files"), root)
        for d in data["drifting_sources"]:
            _relativize(d, ("source_file",), root)
        payload.append(data)
    return json.dumps(payload, indent=2)


def coverage_to_json(reports: list[CoverageReport], root: Path) -> str:
    payload = [_relativize(r.model_dump(mode="json"), ("file",), root) for r in reports]
    return json.dumps(payload, indent=2)
