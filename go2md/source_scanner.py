"""Input resolution: single files, recursive directory walks, and piped stdin."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import IO, Any, List, Optional, Sequence

from .errors import NoInputError, ReadError, WalkError
from .logging import get_logger
from .models import SourceFile

STDIN_NAME = "<stdin>"
DEFAULT_EXTENSION = ".go"


@dataclass(frozen=True)
class ScanRequest:
    """Input selection for one run."""

    directory: Optional[Path] = None
    input_file: Optional[Path] = None
    stream: bool = False
    stdin: Optional[IO[Any]] = None
    extension: str = DEFAULT_EXTENSION
    exclude_paths: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True)
class SourceInput:
    """A resolved input; stdin content is captured up front, files are read lazily."""

    path: str
    content: Optional[bytes] = None

    def load(self) -> SourceFile:
        if self.content is not None:
            return SourceFile(path=self.path, content=self.content)
        return read_source(Path(self.path))


def read_source(path: Path) -> SourceFile:
    """Read a whole file into memory."""
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise ReadError(path, f"{path}: {exc.strerror or exc}") from exc
    return SourceFile(path=str(path), content=content)


def read_stream(stream: IO[Any]) -> SourceFile:
    """Read a binary or text stream to EOF."""
    binary = getattr(stream, "buffer", stream)
    data = binary.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return SourceFile(path=STDIN_NAME, content=data)


def stdin_has_data(stream: Optional[IO[Any]]) -> bool:
    """Return True when the stream is piped or redirected rather than a terminal."""
    if stream is None:
        return False
    try:
        return not stream.isatty()
    except (AttributeError, ValueError):
        return False


def find_sources(
    directory: Path,
    *,
    extension: str = DEFAULT_EXTENSION,
    exclude_paths: Sequence[str] = (),
) -> List[Path]:
    """Return every path under ``directory`` whose name ends with ``extension``.

    Entries are visited in lexical order with subdirectories descended at
    their sorted position, so the result is stable for an unchanged tree. Any
    traversal failure raises ``WalkError`` and no paths are returned.
    """
    root = Path(directory)
    matches: List[Path] = []
    try:
        root_is_dir = root.is_dir()
    except OSError as exc:
        raise WalkError(f"{root}: {exc}") from exc
    if not root_is_dir:
        if not root.exists():
            raise WalkError(f"{root}: no such file or directory")
        if root.name.endswith(extension):
            matches.append(root)
        return matches
    _walk(root, root, extension, exclude_paths, matches)
    return matches


def _walk(
    root: Path,
    current: Path,
    extension: str,
    exclude_paths: Sequence[str],
    matches: List[Path],
) -> None:
    try:
        with os.scandir(current) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)
    except OSError as exc:
        raise WalkError(f"{current}: {exc.strerror or exc}") from exc

    for entry in entries:
        path = current / entry.name
        rel_path = path.relative_to(root).as_posix()
        if _is_excluded(rel_path, exclude_paths):
            continue
        if entry.name.endswith(extension):
            matches.append(path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            raise WalkError(f"{path}: {exc.strerror or exc}") from exc
        if is_dir:
            _walk(root, path, extension, exclude_paths, matches)


def _is_excluded(rel_path: str, patterns: Sequence[str]) -> bool:
    for pattern in patterns:
        cleaned = pattern.rstrip("/")
        if not cleaned:
            continue
        if fnmatchcase(rel_path, cleaned):
            return True
        if "/" not in cleaned and fnmatchcase(rel_path.rsplit("/", 1)[-1], cleaned):
            return True
    return False


class SourceScanner:
    """Decides which inputs a run processes."""

    def __init__(self) -> None:
        self.logger = get_logger("source_scanner")

    def resolve(self, request: ScanRequest) -> List[SourceInput]:
        """Return inputs in processing order.

        Stream mode prefers piped stdin, then ``input_file``, and raises
        ``NoInputError`` when neither is available. Otherwise a directory walk
        wins over ``input_file``; with neither set there is nothing to do.
        """
        if request.stream:
            stdin = request.stdin if request.stdin is not None else sys.stdin
            if stdin_has_data(stdin):
                self.logger.debug("Reading source from piped stdin")
                source = read_stream(stdin)
                return [SourceInput(path=source.path, content=source.content)]
            if request.input_file is not None:
                return [SourceInput(path=str(request.input_file))]
            raise NoInputError()

        if request.directory is not None:
            if request.input_file is not None:
                self.logger.debug("Both -r and -i given; scanning %s", request.directory)
            paths = find_sources(
                request.directory,
                extension=request.extension,
                exclude_paths=request.exclude_paths,
            )
            self.logger.debug("Scanner discovered %d source files", len(paths))
            return [SourceInput(path=str(path)) for path in paths]

        if request.input_file is not None:
            return [SourceInput(path=str(request.input_file))]

        self.logger.debug("No input selected; output will be empty")
        return []


__all__ = [
    "DEFAULT_EXTENSION",
    "STDIN_NAME",
    "ScanRequest",
    "SourceInput",
    "SourceScanner",
    "find_sources",
    "read_source",
    "read_stream",
    "stdin_has_data",
]
