"""Tests for the tree-sitter Go parser."""

from __future__ import annotations

import textwrap

import pytest

from go2md.analyzers import GoParser, normalize_source
from go2md.errors import NormalizeError, ParseError
from go2md.models import (
    DocBlock,
    FunctionDeclaration,
    ParsedFile,
    SourceFile,
    TypeDeclaration,
    ValueDeclaration,
)


def _parse(source: str, path: str = "example.go") -> ParsedFile:
    content = textwrap.dedent(source).lstrip("\n").encode("utf-8")
    return GoParser().parse(SourceFile(path=path, content=content))


def test_parser_attaches_package_doc_block() -> None:
    parsed = _parse(
        """
        // Package: demo
        // Description: a demo
        package demo
        """
    )

    assert parsed.package_name == "demo"
    assert parsed.package_doc == DocBlock(lines=("// Package: demo", "// Description: a demo"))
    assert parsed.declarations == ()


def test_parser_ignores_detached_package_comment() -> None:
    parsed = _parse(
        """
        //go:build linux

        package demo
        """
    )

    assert parsed.package_doc is None


def test_parser_collects_functions_and_methods_in_source_order() -> None:
    parsed = _parse(
        """
        package shapes

        // Title: Area
        // Description: computes the area
        func (s *Square) Area() int { return s.side * s.side }

        func helper() {}

        // Title: New
        func New() *Square { return &Square{} }
        """
    )

    assert parsed.declarations == (
        FunctionDeclaration(
            name="Area",
            doc=DocBlock(lines=("// Title: Area", "// Description: computes the area")),
            receiver="(s *Square)",
        ),
        FunctionDeclaration(name="helper"),
        FunctionDeclaration(name="New", doc=DocBlock(lines=("// Title: New",))),
    )


def test_parser_splits_value_specs_into_named_declarations() -> None:
    parsed = _parse(
        """
        package demo

        const (
        	// Answer is the answer.
        	Answer = 42
        	Other  = 1
        )

        // Limits doc
        var low, high int
        """
    )

    assert parsed.declarations == (
        ValueDeclaration(
            name="Answer",
            storage_kind="const",
            doc=DocBlock(lines=("// Answer is the answer.",)),
        ),
        ValueDeclaration(name="Other", storage_kind="const"),
        ValueDeclaration(name="low", storage_kind="var"),
        ValueDeclaration(name="high", storage_kind="var"),
    )


def test_parser_leaves_unparenthesized_specs_undocumented_by_default() -> None:
    source = """
        package demo

        // X is doc
        var X = 1

        // T is doc
        type T int
        """

    assert _parse(source).declarations == (
        ValueDeclaration(name="X", storage_kind="var"),
        TypeDeclaration(name="T"),
    )


def test_parser_can_attach_keyword_comment_to_single_spec() -> None:
    content = b"package demo\n\n// Limits doc\nvar low, high int\n\n// T is doc\ntype T int\n"

    parsed = GoParser(single_spec_docs=True).parse(SourceFile(path="demo.go", content=content))

    assert parsed.declarations == (
        ValueDeclaration(name="low", storage_kind="var", doc=DocBlock(lines=("// Limits doc",))),
        ValueDeclaration(name="high", storage_kind="var", doc=DocBlock(lines=("// Limits doc",))),
        TypeDeclaration(name="T", doc=DocBlock(lines=("// T is doc",))),
    )


def test_parser_uses_spec_docs_inside_groups_only() -> None:
    parsed = _parse(
        """
        package demo

        // Group doc is not attached to the specs.
        var (
        	first  = 1
        	// second doc
        	second = 2
        )
        """
    )

    assert parsed.declarations == (
        ValueDeclaration(name="first", storage_kind="var"),
        ValueDeclaration(name="second", storage_kind="var", doc=DocBlock(lines=("// second doc",))),
    )


def test_parser_collects_types_and_aliases() -> None:
    parsed = _parse(
        """
        package geo

        // Point is a location.
        type Point struct {
        	X, Y int
        }

        type (
        	// Vector doc
        	Vector = Point
        	Line   struct{ A, B Point }
        )
        """
    )

    assert parsed.declarations == (
        TypeDeclaration(name="Point"),
        TypeDeclaration(name="Vector", doc=DocBlock(lines=("// Vector doc",))),
        TypeDeclaration(name="Line"),
    )


def test_parser_does_not_treat_trailing_or_detached_comments_as_docs() -> None:
    parsed = _parse(
        """
        package demo

        var x = 1 // trailing
        func Bar() {}

        // detached

        func Baz() {}
        """
    )

    assert parsed.declarations == (
        ValueDeclaration(name="x", storage_kind="var"),
        FunctionDeclaration(name="Bar"),
        FunctionDeclaration(name="Baz"),
    )


def test_parser_ignores_imports() -> None:
    parsed = _parse(
        """
        package main

        // imports are not documented
        import "fmt"

        func main() { fmt.Println("hi") }
        """
    )

    assert parsed.declarations == (FunctionDeclaration(name="main"),)


def test_parser_reports_syntax_errors_with_position() -> None:
    with pytest.raises(ParseError) as excinfo:
        _parse(
            """
            package demo

            func Broken( {
            """,
            path="broken.go",
        )

    assert excinfo.value.path == "broken.go"
    assert str(excinfo.value).startswith("broken.go:3:")


def test_parser_requires_package_clause() -> None:
    with pytest.raises(ParseError, match="expected 'package' clause"):
        _parse("func Orphan() {}\n")


def test_normalize_source_rejects_invalid_utf8() -> None:
    with pytest.raises(NormalizeError) as excinfo:
        normalize_source(SourceFile(path="bad.go", content=b"package x\n\xff\xfe\n"))

    assert excinfo.value.path == "bad.go"


def test_normalize_source_unifies_line_endings_and_trailing_space() -> None:
    source = SourceFile(path="crlf.go", content=b"\xef\xbb\xbf// Title: x   \r\npackage x\r\n")

    assert normalize_source(source) == "// Title: x\npackage x\n"


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        (b"package p\n\ntype T int", TypeDeclaration(name="T")),
        (b"package p\n\nvar V int", ValueDeclaration(name="V", storage_kind="var")),
    ],
)
def test_parser_accepts_source_without_final_newline(content: bytes, expected: object) -> None:
    parsed = GoParser().parse(SourceFile(path="x.go", content=content))

    assert parsed.declarations == (expected,)


def test_normalize_source_ends_with_single_newline() -> None:
    assert normalize_source(SourceFile(path="a.go", content=b"package a")) == "package a\n"
    assert normalize_source(SourceFile(path="b.go", content=b"package b\n\n\n")) == "package b\n"
    assert normalize_source(SourceFile(path="c.go", content=b"")) == ""


def test_parser_handles_crlf_sources() -> None:
    source = SourceFile(
        path="crlf.go",
        content=b"// Package: crlf\r\npackage crlf\r\n\r\n// Title: F\r\nfunc F() {}\r\n",
    )

    parsed = GoParser().parse(source)

    assert parsed.package_doc == DocBlock(lines=("// Package: crlf",))
    assert parsed.declarations == (
        FunctionDeclaration(name="F", doc=DocBlock(lines=("// Title: F",))),
    )
