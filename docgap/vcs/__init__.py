"""Version-control access for docgap."""

from docgap.vcs.base import VCSBackend
from docgap.vcs.filter import NOISE_PATTERN, compile_ignore_patterns, filter_meaningful_commits
from docgap.vcs.git import GitBackend, GitCommandError
from docgap.vcs.history import CommitHistoryResolver
from docgap.vcs.models import Commit, EffectiveUpdate

__all__ = [
    "NOISE_PATTERN",
    "Commit",
    "CommitHistoryResolver",
    "EffectiveUpdate",
    "GitBackend",
    "GitCommandError",
    "VCSBackend",
    "compile_ignore_patterns",
    "filter_meaningful_commits",
]
