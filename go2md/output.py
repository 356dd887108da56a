"""Output sink for the rendered Markdown document."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import IO, Optional

from .errors import OutputError


def write_output(
    text: str,
    destination: Optional[Path] = None,
    *,
    stream: Optional[IO[str]] = None,
) -> Optional[Path]:
    """Overwrite ``destination`` with ``text``, or print it when no path is given.

    Returns the written path, or ``None`` when the text went to the stream.
    """
    if destination is None:
        target = stream if stream is not None else sys.stdout
        target.write(text)
        target.flush()
        return None

    path = Path(destination).expanduser()
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise OutputError(f"{path}: {exc.strerror or exc}") from exc
    return path


__all__ = ["write_output"]
