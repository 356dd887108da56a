"""Tree-sitter powered Go declaration parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import NormalizeError, ParseError
from ..models import (
    Declaration,
    DocBlock,
    FunctionDeclaration,
    ParsedFile,
    SourceFile,
    TypeDeclaration,
    ValueDeclaration,
)

_TERMINATORS = {"\n", ";", "\x00"}
_TYPE_SPECS = {"type_spec", "type_alias"}
_VALUE_SPECS = {
    "const_declaration": ("const", "const_spec"),
    "var_declaration": ("var", "var_spec"),
}


def normalize_source(source: SourceFile) -> str:
    """Decode and normalize source text before parsing.

    Line endings become ``\\n``, trailing whitespace is removed from every
    line, and non-empty text ends with exactly one newline, as ``gofmt``
    output does.
    """
    try:
        text = source.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise NormalizeError(source.path, f"{source.path}: invalid UTF-8 encoding: {exc}") from exc
    if text.startswith("\ufeff"):
        text = text[1:]
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = "\n".join(line.rstrip() for line in text.split("\n")).rstrip("\n")
    return text + "\n" if text else text


@dataclass
class _CommentGroup:
    nodes: List[Node] = field(default_factory=list)
    end_row: int = -1
    # Comments sharing a line with the previous token never document what follows.
    trailing: bool = False


class GoParser:
    """Parses Go source into top-level declarations with their doc blocks."""

    def __init__(self, *, single_spec_docs: bool = False) -> None:
        # When set, the comment above an unparenthesized const, var, or type
        # keyword documents its lone spec. The Go parser leaves it unattached.
        self.single_spec_docs = single_spec_docs
        self._parser: Optional[Parser] = None

    def parse(self, source: SourceFile) -> ParsedFile:
        text = normalize_source(source)
        source_bytes = text.encode("utf-8")
        tree = self._get_parser().parse(source_bytes)
        root = tree.root_node
        if root.has_error:
            line, column = _first_error_position(root)
            raise ParseError(source.path, f"{source.path}:{line}:{column}: syntax error")
        return _DeclarationCollector(source.path, source_bytes, self.single_spec_docs).collect(root)

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_go.language()))
        return self._parser


class _DeclarationCollector:
    def __init__(self, path: str, source_bytes: bytes, single_spec_docs: bool = False) -> None:
        self.path = path
        self.source_bytes = source_bytes
        self.single_spec_docs = single_spec_docs

    def collect(self, root: Node) -> ParsedFile:
        package_name: Optional[str] = None
        package_doc: Optional[DocBlock] = None
        declarations: List[Declaration] = []

        for node, doc in self._iter_documented(root.children):
            if node.type == "package_clause":
                package_name = self._package_name(node)
                package_doc = doc
            elif node.type == "function_declaration":
                name = self._field_text(node, "name")
                declarations.append(FunctionDeclaration(name=name, doc=doc))
            elif node.type == "method_declaration":
                name = self._field_text(node, "name")
                receiver = self._field_text(node, "receiver") or None
                declarations.append(FunctionDeclaration(name=name, doc=doc, receiver=receiver))
            elif node.type == "type_declaration":
                declarations.extend(self._type_declarations(node, doc))
            elif node.type in _VALUE_SPECS:
                declarations.extend(self._value_declarations(node, doc))

        if package_name is None:
            raise ParseError(self.path, f"{self.path}:1:1: expected 'package' clause")
        return ParsedFile(
            path=self.path,
            package_name=package_name,
            package_doc=package_doc,
            declarations=tuple(declarations),
        )

    def _type_declarations(self, node: Node, doc: Optional[DocBlock]) -> Iterator[TypeDeclaration]:
        for spec, spec_doc in self._iter_specs(node, _TYPE_SPECS, doc):
            yield TypeDeclaration(name=self._field_text(spec, "name"), doc=spec_doc)

    def _value_declarations(self, node: Node, doc: Optional[DocBlock]) -> Iterator[ValueDeclaration]:
        storage_kind, spec_type = _VALUE_SPECS[node.type]
        for spec, spec_doc in self._iter_specs(node, {spec_type}, doc):
            for name_node in spec.children_by_field_name("name"):
                yield ValueDeclaration(
                    name=self._node_text(name_node),
                    storage_kind=storage_kind,
                    doc=spec_doc,
                )

    def _iter_specs(
        self, node: Node, spec_types: Iterable[str], doc: Optional[DocBlock]
    ) -> Iterator[Tuple[Node, Optional[DocBlock]]]:
        container = node
        for child in node.children:
            # Newer grammars wrap parenthesized var specs in their own node.
            if child.type == "var_spec_list":
                container = child
        grouped = any(child.type == "(" for child in container.children)
        if grouped:
            for spec, spec_doc in self._iter_documented(container.children):
                if spec.type in spec_types:
                    yield spec, spec_doc
            return
        spec_doc = doc if self.single_spec_docs else None
        for spec in container.children:
            if spec.type in spec_types:
                yield spec, spec_doc

    def _iter_documented(
        self, nodes: Sequence[Node]
    ) -> Iterator[Tuple[Node, Optional[DocBlock]]]:
        """Yield non-comment siblings paired with the comment group that documents them.

        Comments on consecutive lines form one group. A group documents the
        next token when it ends on the line directly above it.
        """
        group: Optional[_CommentGroup] = None
        previous_end_row: Optional[int] = None

        for node in nodes:
            if node.type in _TERMINATORS:
                continue
            start_row = node.start_point[0]
            if node.type == "comment":
                if group is not None and group.trailing and start_row <= group.end_row:
                    group.nodes.append(node)
                elif group is not None and not group.trailing and start_row <= group.end_row + 1:
                    group.nodes.append(node)
                else:
                    trailing = previous_end_row is not None and start_row == previous_end_row
                    group = _CommentGroup(trailing=trailing)
                    group.nodes.append(node)
                group.end_row = node.end_point[0]
                continue

            doc: Optional[DocBlock] = None
            if group is not None and not group.trailing and group.end_row + 1 == start_row:
                doc = DocBlock(lines=tuple(self._node_text(comment) for comment in group.nodes))
            yield node, doc
            group = None
            previous_end_row = node.end_point[0]

    def _package_name(self, node: Node) -> str:
        for child in node.children:
            if child.type == "package_identifier":
                return self._node_text(child)
        return ""

    def _field_text(self, node: Node, field_name: str) -> str:
        child = node.child_by_field_name(field_name)
        return self._node_text(child) if child is not None else ""

    def _node_text(self, node: Node) -> str:
        return self.source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _first_error_position(node: Node) -> Tuple[int, int]:
    """Return the 1-based position of the innermost error or missing node."""
    while True:
        for child in node.children:
            if child.is_missing or child.has_error:
                node = child
                break
        else:
            row, column = node.start_point
            return row + 1, column + 1


__all__ = ["GoParser", "normalize_source"]
