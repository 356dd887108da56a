"""Exception hierarchy for the go2md pipeline."""

from __future__ import annotations

from pathlib import Path


class Go2MdError(RuntimeError):
    """Base class for errors raised by go2md."""


class SourceError(Go2MdError):
    """A single source file could not be processed; the run skips it."""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(message)
        self.path = str(path)


class ReadError(SourceError):
    """Raised when a source file cannot be read."""


class NormalizeError(SourceError):
    """Raised when source text fails the pre-parse normalization pass."""


class ParseError(SourceError):
    """Raised when source text is not syntactically valid Go."""


class WalkError(Go2MdError):
    """Raised when a directory traversal fails; aborts the whole run."""


class OutputError(Go2MdError):
    """Raised when the rendered document cannot be written."""


class NoInputError(Go2MdError):
    """Raised in stream mode when neither stdin nor a file provides input."""

    def __init__(self, message: str = "No input provided!") -> None:
        super().__init__(message)


__all__ = [
    "Go2MdError",
    "NoInputError",
    "NormalizeError",
    "OutputError",
    "ParseError",
    "ReadError",
    "SourceError",
    "WalkError",
]
