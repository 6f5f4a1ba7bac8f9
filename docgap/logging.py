"""Logging setup for docgap commands."""

from __future__ import annotations

import json
import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "docgap"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers in CI."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str = "info", fmt: str = "text", verbose: bool = False) -> logging.Logger:
    """Attach a single stderr handler to the docgap logger hierarchy."""
    logger = logging.getLogger(_LOGGER_NAME)
    resolved = logging.DEBUG if verbose else _LEVELS.get(level, logging.INFO)
    logger.setLevel(resolved)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked repeatedly
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(resolved)
    logger.addHandler(handler)
    return logger


__all__ = ["JsonFormatter", "configure_logging"]
