"""Diagnostics for go2md runs.

The rendered Markdown may go to stdout, so console diagnostics always go to
stderr. Per-file failures are reported with a fixed label per failure kind,
e.g. ``Error parsing Go file: demo.go:3:1: syntax error``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Any, Optional

from .errors import NormalizeError, ParseError, ReadError, SourceError

_LOGGER_NAME = "go2md"
_CONSOLE_FORMAT = "[go2md] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

SOURCE_ERROR_LABELS = {
    ReadError: "Error reading the file",
    NormalizeError: "Error formatting the source",
    ParseError: "Error parsing Go file",
}


def get_logger(name: str | None = None) -> logging.Logger:
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: Optional[IO[Any]] = None,
) -> logging.Logger:
    """Route go2md diagnostics to stderr (or ``stream``) and optionally a file.

    The log file is opened before any handler is replaced, so an ``OSError``
    from an unusable path leaves the previous configuration untouched.
    """
    level = logging.DEBUG if verbose else logging.INFO
    file_handler: Optional[logging.FileHandler] = None
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))

    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)
    if file_handler is not None:
        logger.addHandler(file_handler)
    return logger


def source_error_label(exc: SourceError) -> str:
    for error_type, label in SOURCE_ERROR_LABELS.items():
        if isinstance(exc, error_type):
            return label
    return "Error processing file"


def log_source_error(logger: logging.Logger, exc: SourceError) -> None:
    """Report a skipped file as ``<label>: <detail>``."""
    logger.error("%s: %s", source_error_label(exc), exc)


__all__ = [
    "SOURCE_ERROR_LABELS",
    "configure_logging",
    "get_logger",
    "log_source_error",
    "source_error_label",
]
