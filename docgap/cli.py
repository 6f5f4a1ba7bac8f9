"""CLI entry point for docgap."""

from __future__ import annotations

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax

from docgap import __version__
from docgap.config import DEFAULT_CONFIG_TEMPLATE, DocGapConfig, load_config
from docgap.coverage import CoverageReport, analyze_coverage
from docgap.drift.models import FileCheckResult, VerificationStatus
from docgap.errors import ConfigError, DriftError
from docgap.logging import configure_logging
from docgap.output import (
    coverage_to_json,
    format_annotations,
    render_coverage,
    render_results,
    render_summary,
    results_to_json,
)
from docgap.runner import run_analysis

app = typer.Typer(
    name="docgap",
    help="Detect documentation that has drifted from the code it describes.",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Manage docgap configuration.")
app.add_typer(config_app, name="config")

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_DRIFT = 1
EXIT_CONFIG = 2
EXIT_ANALYSIS = 3


class CheckFormat(str, Enum):
    table = "table"
    json = "json"
    github = "github"


class CoverageFormat(str, Enum):
    table = "table"
    json = "json"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"docgap {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit."),
    ] = False,
) -> None:
    """Global options."""


def _load(root: Path, config_path: str | None) -> DocGapConfig:
    try:
        return load_config(root, config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/red] {e}")
        raise typer.Exit(EXIT_CONFIG)


def _drifting(results: list[FileCheckResult]) -> list[FileCheckResult]:
    return [r for r in results if r.status is not VerificationStatus.FRESH]


@app.command()
def check(
    root: Annotated[str, typer.Argument(help="Project directory to analyze")] = ".",
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to config file (default: .docgap.yaml)")
    ] = None,
    strict: Annotated[
        bool, typer.Option("--strict", help="Exit with code 1 if any drift is detected (useful for CI)")
    ] = False,
    output_format: Annotated[
        CheckFormat, typer.Option("--format", "-f", help="Output format")
    ] = CheckFormat.table,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Check documentation drift in ROOT."""
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        err_console.print(f"[red]Error:[/red] directory not found: {root}")
        raise typer.Exit(EXIT_CONFIG)

    cfg = _load(root_path, config)
    configure_logging(cfg.log_level, cfg.log_format, verbose=verbose)

    if output_format is CheckFormat.table:
        console.print("[bold cyan]docgap: analyzing documentation drift...[/bold cyan]\n")

    try:
        results = asyncio.run(run_analysis(root_path, cfg))
    except DriftError as e:
        err_console.print(f"[red]Analysis failed ({e.kind.value}):[/red] {e}")
        raise typer.Exit(EXIT_ANALYSIS)

    drifting = _drifting(results)
    if output_format is CheckFormat.json:
        typer.echo(results_to_json(results, root_path))
    elif output_format is CheckFormat.github:
        for line in format_annotations(results, root_path, strict=strict):
            typer.echo(line)
        if drifting:
            typer.echo(f"Drift detected in {len(drifting)} file(s).")
        else:
            typer.echo("Documentation is fresh.")
    else:
        render_results(results, root_path, console)
        render_summary(results, console)

    if strict and drifting:
        if output_format is CheckFormat.table:
            console.print("[bold red]\n[STRICT MODE] Drift detected. Exiting with error.[/bold red]")
        raise typer.Exit(EXIT_DRIFT)


@app.command()
def coverage(
    sources: Annotated[list[Path], typer.Argument(help="Source files to score")],
    doc: Annotated[Path, typer.Option("--doc", "-d", help="Documentation file to search")],
    min_score: Annotated[
        float, typer.Option("--min-score", min=0.0, max=1.0, help="Fail if any file scores below this")
    ] = 0.0,
    output_format: Annotated[
        CoverageFormat, typer.Option("--format", "-f", help="Output format")
    ] = CoverageFormat.table,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Score how many classes and functions in SOURCES the doc mentions."""
    configure_logging(verbose=verbose)
    try:
        doc_text = doc.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        err_console.print(f"[red]Error:[/red] cannot read {doc}: {e}")
        raise typer.Exit(EXIT_CONFIG)

    try:
        reports: list[CoverageReport] = asyncio.run(analyze_coverage(sources, doc_text))
    except DriftError as e:
        err_console.print(f"[red]Coverage failed ({e.kind.value}):[/red] {e}")
        raise typer.Exit(EXIT_ANALYSIS)

    cwd = Path.cwd()
    if output_format is CoverageFormat.json:
        typer.echo(coverage_to_json(reports, cwd))
    else:
        render_coverage(reports, cwd, console)

    below = [r for r in reports if r.score < min_score]
    if below:
        if output_format is CoverageFormat.table:
            console.print(f"[red]{len(below)} file(s) below minimum coverage {min_score:.0%}[/red]")
        raise typer.Exit(EXIT_DRIFT)


@config_app.command("init")
def config_init(
    path: Annotated[str, typer.Option("--path", help="Directory to write .docgap.yaml into")] = ".",
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
) -> None:
    """Write a starter .docgap.yaml."""
    target = Path(path) / ".docgap.yaml"
    if target.exists() and not force:
        err_console.print(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(EXIT_CONFIG)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    console.print(f"[green]Created[/green] {target}")


@config_app.command("show")
def config_show(
    root: Annotated[str, typer.Argument(help="Project directory")] = ".",
    config: Annotated[str | None, typer.Option("--config", "-c", help="Path to config file")] = None,
) -> None:
    """Print the resolved configuration, defaults included."""
    cfg = _load(Path(root), config)
    dumped = yaml.safe_dump(cfg.model_dump(mode="json"), sort_keys=False)
    console.print(Syntax(dumped, "yaml", theme="ansi_dark"))


if __name__ == "__main__":
    app()
