"""Template variants and template file names for Markdown rendering."""

from __future__ import annotations

from enum import Enum


class TemplateVariant(str, Enum):
    """How the package doc block is laid out."""

    # `# Package: ...` header followed by Description/Git Repository/License fields.
    FIELDS = "fields"
    # `# <package clause name>` header followed by the raw comment lines.
    VERBATIM = "verbatim"


PACKAGE_TEMPLATES = {
    TemplateVariant.FIELDS: "package_fields.md.j2",
    TemplateVariant.VERBATIM: "package_verbatim.md.j2",
}
FUNCTION_TEMPLATE = "function.md.j2"
TYPE_TEMPLATE = "type.md.j2"
VALUE_TEMPLATE = "value.md.j2"
