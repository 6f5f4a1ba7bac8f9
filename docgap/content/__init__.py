"""File content access and semantic normalization."""

from docgap.content.normalizer import (
    ContentNormalizer,
    ExternalNormalizer,
    RegexNormalizer,
    clean_content,
    create_normalizer,
    strip_comments,
)
from docgap.content.snapshot import ContentSnapshotProvider

__all__ = [
    "ContentNormalizer",
    "ContentSnapshotProvider",
    "ExternalNormalizer",
    "RegexNormalizer",
    "clean_content",
    "create_normalizer",
    "strip_comments",
]
