"""Renders parsed Go declarations into Markdown sections."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader

from ..models import (
    Declaration,
    DocBlock,
    FunctionDeclaration,
    ParsedFile,
    TypeDeclaration,
    ValueDeclaration,
)
from ..tags import FUNCTION_TAGS, PACKAGE_TAGS, doc_text, extract_tags
from .constants import (
    FUNCTION_TEMPLATE,
    PACKAGE_TEMPLATES,
    TYPE_TEMPLATE,
    VALUE_TEMPLATE,
    TemplateVariant,
)


class MarkdownRenderer:
    """Turns a parsed file into ordered Markdown sections using fixed templates."""

    def __init__(
        self,
        variant: TemplateVariant | str = TemplateVariant.FIELDS,
        *,
        passthrough_untagged: bool = True,
        templates_dir: Path | None = None,
    ) -> None:
        self.variant = TemplateVariant(variant)
        self.passthrough_untagged = passthrough_untagged
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def render_file(self, parsed: ParsedFile) -> List[str]:
        """Return the sections for one file: package block first, then declarations."""
        sections: List[str] = []
        if parsed.package_doc is not None:
            sections.append(self.render_package(parsed.package_name, parsed.package_doc))
        for declaration in parsed.declarations:
            sections.append(self.render_declaration(declaration))
        return sections

    def render_package(self, package_name: str, doc: DocBlock) -> str:
        template = self._env.get_template(PACKAGE_TEMPLATES[self.variant])
        if self.variant is TemplateVariant.VERBATIM:
            return template.render(name=package_name, lines=doc.lines)
        extraction = extract_tags(doc.lines, PACKAGE_TAGS)
        residual = extraction.residual if self.passthrough_untagged else ()
        return template.render(tags=extraction.tags.fields(), residual=residual)

    def render_declaration(self, declaration: Declaration) -> str:
        if isinstance(declaration, FunctionDeclaration):
            return self.render_function(declaration)
        if isinstance(declaration, TypeDeclaration):
            return self._env.get_template(TYPE_TEMPLATE).render(
                name=declaration.name,
                doc_text=_doc_text_or_none(declaration.doc),
            )
        if isinstance(declaration, ValueDeclaration):
            return self._env.get_template(VALUE_TEMPLATE).render(
                name=declaration.name,
                storage_kind=declaration.storage_kind,
                doc_text=_doc_text_or_none(declaration.doc),
            )
        raise TypeError(f"Unsupported declaration: {declaration!r}")

    def render_function(self, declaration: FunctionDeclaration) -> str:
        # Without a doc block only the header is emitted.
        tags = None
        if declaration.doc is not None:
            tags = extract_tags(declaration.doc.lines, FUNCTION_TAGS).tags.fields()
        return self._env.get_template(FUNCTION_TEMPLATE).render(name=declaration.name, tags=tags)

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


def _doc_text_or_none(doc: Optional[DocBlock]) -> Optional[str]:
    if doc is None:
        return None
    return doc_text(doc.lines)


__all__ = ["MarkdownRenderer"]
