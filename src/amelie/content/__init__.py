from .extractor import END_MARKER, START_MARKER, extract_document, parse_document
from .rendering import render_markdown
from .types import ParseResult, ParseStatus, RenderedDocument, lookup_field

__all__ = [
    "END_MARKER",
    "START_MARKER",
    "ParseResult",
    "ParseStatus",
    "RenderedDocument",
    "extract_document",
    "lookup_field",
    "parse_document",
    "render_markdown",
]
