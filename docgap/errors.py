"""Error taxonomy for the drift engine."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every DriftError so callers can branch without isinstance."""

    NOT_A_REPOSITORY = "not_a_repository"
    HISTORY_FETCH_FAILED = "history_fetch_failed"
    INVALID_PATTERN = "invalid_pattern"
    READ_FAILED = "read_failed"
    NORMALIZATION_FAILED = "normalization_failed"


class DriftError(Exception):
    """Wraps a failure inside the engine with its kind and the offending path."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.kind = kind
        self.path = path
        detail = f"{message}: {cause}" if cause is not None else message
        super().__init__(detail)
        if cause is not None:
            self.__cause__ = cause


class ConfigError(ValueError):
    """Raised when the configuration file is missing, unparsable, or invalid."""
