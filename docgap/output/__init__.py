from docgap.output.annotations import format_annotation, format_annotations
from docgap.output.render import (
    coverage_to_json,
    render_coverage,
    render_results,
    render_summary,
    results_to_json,
)

__all__ = [
    "coverage_to_json",
    "format_annotation",
    "format_annotations",
    "render_coverage",
    "render_results",
    "render_summary",
    "results_to_json",
]
