"""Source parsers that turn Go files into declaration trees."""

from .go import GoParser, normalize_source

__all__ = ["GoParser", "normalize_source"]
