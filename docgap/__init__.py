"""docgap - detect documentation that has drifted from the code it describes."""

__version__ = "0.1.0"

from docgap.config import DocGapConfig, load_config  # noqa: E402
from docgap.coverage import CoverageAnalyzer, CoverageReport, Entity, analyze_coverage  # noqa: E402
from docgap.drift import (  # noqa: E402
    DriftDetector,
    DriftingSource,
    DriftReason,
    FileCheckResult,
    TaskScheduler,
    VerificationStatus,
    check_drift,
)
from docgap.errors import ConfigError, DriftError, ErrorKind  # noqa: E402
from docgap.runner import run_analysis, run_analysis_sync  # noqa: E402

__all__ = [
    "ConfigError",
    "CoverageAnalyzer",
    "CoverageReport",
    "DocGapConfig",
    "DriftDetector",
    "DriftError",
    "DriftReason",
    "DriftingSource",
    "Entity",
    "ErrorKind",
    "FileCheckResult",
    "TaskScheduler",
    "VerificationStatus",
    "analyze_coverage",
    "check_drift",
    "load_config",
    "run_analysis",
    "run_analysis_sync",
]
