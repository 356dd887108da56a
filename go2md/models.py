"""Core data models shared across go2md components."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class SourceFile:
    """A source input held fully in memory."""

    path: str
    content: bytes


@dataclass(frozen=True)
class DocBlock:
    """Comment lines immediately preceding a declaration, markers included."""

    lines: Tuple[str, ...]


@dataclass(frozen=True)
class FunctionDeclaration:
    """Top-level function or method."""

    name: str
    doc: Optional[DocBlock] = None
    receiver: Optional[str] = None


@dataclass(frozen=True)
class TypeDeclaration:
    """Named type or type alias."""

    name: str
    doc: Optional[DocBlock] = None


@dataclass(frozen=True)
class ValueDeclaration:
    """A single constant or variable name."""

    name: str
    storage_kind: str
    doc: Optional[DocBlock] = None


Declaration = Union[FunctionDeclaration, TypeDeclaration, ValueDeclaration]


@dataclass(frozen=True)
class ParsedFile:
    """Declaration tree extracted from one source file."""

    path: str
    package_name: str
    package_doc: Optional[DocBlock] = None
    declarations: Tuple[Declaration, ...] = ()


@dataclass
class MarkdownDocument:
    """Append-only ordered list of rendered Markdown sections."""

    sections: List[str] = field(default_factory=list)

    def extend(self, sections: List[str]) -> None:
        self.sections.extend(sections)

    def render(self) -> str:
        return "".join(self.sections)
