"""Pipeline orchestration: resolve inputs, parse, render, and collect sections."""

from __future__ import annotations

from typing import List

from .analyzers import GoParser
from .errors import SourceError
from .logging import get_logger, log_source_error
from .models import MarkdownDocument
from .rendering import MarkdownRenderer
from .source_scanner import ScanRequest, SourceInput, SourceScanner


class Orchestrator:
    """Coordinates one go2md run from input selection to the finished document."""

    def __init__(
        self,
        scanner: SourceScanner | None = None,
        parser: GoParser | None = None,
        renderer: MarkdownRenderer | None = None,
    ) -> None:
        self.scanner = scanner or SourceScanner()
        self.parser = parser or GoParser()
        self.renderer = renderer or MarkdownRenderer()
        self.logger = get_logger("orchestrator")

    def run(self, request: ScanRequest) -> MarkdownDocument:
        """Render every resolved input into one document.

        Walk and no-input failures propagate; per-file failures are logged
        and the file is skipped.
        """
        inputs = self.scanner.resolve(request)
        document = MarkdownDocument()
        for source_input in inputs:
            try:
                sections = self.render_input(source_input)
            except SourceError as exc:
                log_source_error(self.logger, exc)
                continue
            document.extend(sections)
        self.logger.debug(
            "Rendered %d sections from %d inputs", len(document.sections), len(inputs)
        )
        return document

    def render_input(self, source_input: SourceInput) -> List[str]:
        source = source_input.load()
        parsed = self.parser.parse(source)
        self.logger.debug(
            "Parsed %s: package %s, %d declarations",
            parsed.path,
            parsed.package_name,
            len(parsed.declarations),
        )
        return self.renderer.render_file(parsed)


__all__ = ["Orchestrator"]
