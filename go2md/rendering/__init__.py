"""Markdown rendering for parsed Go files."""

from .constants import TemplateVariant
from .markdown import MarkdownRenderer

__all__ = ["MarkdownRenderer", "TemplateVariant"]
