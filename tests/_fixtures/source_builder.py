"""Helper utilities for constructing temporary Go source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from go2md.models import MarkdownDocument
from go2md.orchestrator import Orchestrator
from go2md.source_scanner import ScanRequest


class SourceTreeBuilder:
    """Utility for writing Go files into a throwaway directory and rendering them."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "src"
        self.root.mkdir()
        self._orchestrator = Orchestrator()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the tree."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_bytes(self, relative: str, content: bytes) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    def render_directory(self) -> MarkdownDocument:
        """Render the whole tree as `-r` would."""
        return self._orchestrator.run(ScanRequest(directory=self.root))

    def render_file(self, relative: str) -> MarkdownDocument:
        """Render a single file as `-i` would."""
        return self._orchestrator.run(ScanRequest(input_file=self.root / relative))

    def path(self, relative: str = "") -> Path:
        """Return a path inside the tree (the root when empty)."""
        return self.root / relative if relative else self.root


__all__ = ["SourceTreeBuilder"]
