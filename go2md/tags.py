"""Tagged doc-comment extraction.

Doc blocks carry metadata as literal ``// Label: value`` lines. Matching is an
exact, case-sensitive prefix comparison against the raw comment line, marker
included, and the captured value is everything after the prefix. Values keep
their leading whitespace, so ``// Title: main`` captures ``" main"``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Mapping, Sequence, Tuple

COMMENT_MARKER = "//"

_DIRECTIVE_RE = re.compile(r"^[a-z0-9]+:[a-z0-9]")
_LEGACY_DIRECTIVES = ("line ", "extern ", "export ")


class Tag(str, Enum):
    """Closed set of recognised labels."""

    PACKAGE = "Package"
    DESCRIPTION = "Description"
    GIT_REPOSITORY = "Git Repository"
    LICENSE = "License"
    TITLE = "Title"
    FUNCTION = "Function"
    CALLED_WITH = "CalledWith"
    EXAMPLE = "Example"
    EXPECTED_OUTPUT = "ExpectedOutput"

    @property
    def prefix(self) -> str:
        return f"{COMMENT_MARKER} {self.value}:"

    @property
    def field_name(self) -> str:
        return self.name.lower()


PACKAGE_TAGS: Tuple[Tag, ...] = (
    Tag.PACKAGE,
    Tag.DESCRIPTION,
    Tag.GIT_REPOSITORY,
    Tag.LICENSE,
)

FUNCTION_TAGS: Tuple[Tag, ...] = (
    Tag.TITLE,
    Tag.DESCRIPTION,
    Tag.FUNCTION,
    Tag.CALLED_WITH,
    Tag.EXAMPLE,
    Tag.EXPECTED_OUTPUT,
)


class TagSet(Mapping[Tag, str]):
    """Captured values for a fixed label set; absent labels read as ``""``."""

    def __init__(self, tags: Iterable[Tag], values: Mapping[Tag, str] | None = None) -> None:
        self._tags = tuple(tags)
        self._values = dict(values or {})

    def __getitem__(self, tag: Tag) -> str:
        if tag not in self._tags:
            raise KeyError(tag)
        return self._values.get(tag, "")

    def __iter__(self) -> Iterator[Tag]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def fields(self) -> Dict[str, str]:
        """Return values keyed by template field name (``called_with`` etc.)."""
        return {tag.field_name: self[tag] for tag in self._tags}

    def __repr__(self) -> str:
        return f"TagSet({self.fields()!r})"


@dataclass(frozen=True)
class Extraction:
    """Result of scanning one doc block."""

    tags: TagSet
    residual: Tuple[str, ...]


def match_tag(line: str, tags: Sequence[Tag]) -> Tuple[Tag, str] | None:
    """Return the label a line carries and its captured value, if any."""
    for tag in tags:
        prefix = tag.prefix
        if line.startswith(prefix):
            return tag, line[len(prefix) :]
    return None


def extract_tags(lines: Iterable[str], tags: Sequence[Tag]) -> Extraction:
    """Scan doc-block lines for ``tags``; later duplicates overwrite earlier ones."""
    values: Dict[Tag, str] = {}
    residual = []
    for line in lines:
        matched = match_tag(line, tags)
        if matched is None:
            residual.append(line)
            continue
        tag, value = matched
        values[tag] = value
    return Extraction(tags=TagSet(tags, values), residual=tuple(residual))


def doc_text(lines: Iterable[str]) -> str:
    """Return the plain text of a doc block with comment markers removed.

    Mirrors the Go toolchain's comment-group text: one space after ``//`` is
    dropped, compiler directives such as ``//go:generate`` are skipped,
    trailing whitespace is stripped, leading blank lines are removed, runs of
    interior blank lines collapse to one, and non-empty text ends with a
    single newline.
    """
    collected = []
    for comment in lines:
        if comment.startswith("//"):
            text = comment[2:]
            if text.startswith(" "):
                text = text[1:]
            elif _is_directive(text):
                continue
        elif comment.startswith("/*") and comment.endswith("*/"):
            text = comment[2:-2]
        else:
            text = comment
        collected.extend(part.rstrip() for part in text.split("\n"))

    kept = []
    for line in collected:
        if line or (kept and kept[-1]):
            kept.append(line)

    # Trailing blank lines collapse into the final newline.
    while kept and not kept[-1]:
        kept.pop()
    if not kept:
        return ""
    return "\n".join(kept) + "\n"


def _is_directive(text: str) -> bool:
    if text.startswith(_LEGACY_DIRECTIVES):
        return True
    return bool(_DIRECTIVE_RE.match(text))


__all__ = [
    "COMMENT_MARKER",
    "Extraction",
    "FUNCTION_TAGS",
    "PACKAGE_TAGS",
    "Tag",
    "TagSet",
    "doc_text",
    "extract_tags",
    "match_tag",
]
