"""Documentation coverage - which code entities a document mentions."""

from docgap.coverage.analyzer import CoverageAnalyzer, analyze_coverage
from docgap.coverage.languages import PROFILES, LanguageProfile, get_profile
from docgap.coverage.models import CoverageReport, Entity

__all__ = [
    "PROFILES",
    "CoverageAnalyzer",
    "CoverageReport",
    "Entity",
    "LanguageProfile",
    "analyze_coverage",
    "get_profile",
]
