"""Split a raw post/page into its metadata block and rendered body.

A document looks like::

    @@:"title": "Hello", "date": "2016-03-15":@@

    Body text in *markdown*.

The ``@@:`` / ``:@@`` markers stand in for the braces of a JSON object. Only
the first block is used; anything after it is body text.
"""

from __future__ import annotations

import json
import re

from .rendering import render_markdown
from .types import ParseResult, ParseStatus, RenderedDocument, lookup_field

START_MARKER = "@@:"
END_MARKER = ":@@"

_METADATA_BLOCK = re.compile(
    re.escape(START_MARKER) + r"(?P<body>.*?)" + re.escape(END_MARKER), re.DOTALL
)


def parse_document(text: str) -> ParseResult:
    match = _METADATA_BLOCK.search(text)
    if match is None:
        return ParseResult(
            status=ParseStatus.MALFORMED_DOCUMENT,
            detail="No @@:...:@@ metadata block found",
        )

    try:
        metadata = json.loads("{" + match.group("body") + "}")
    except ValueError as exc:
        return ParseResult(
            status=ParseStatus.MALFORMED_METADATA,
            detail=f"Metadata block is not valid JSON: {exc}",
            _cause=exc,
        )
    if not isinstance(metadata, dict):  # pragma: no cover - braces force an object
        return ParseResult(
            status=ParseStatus.MALFORMED_METADATA,
            detail="Metadata block is not a JSON object",
        )
    if not lookup_field(metadata, "title"):
        return ParseResult(
            status=ParseStatus.MALFORMED_METADATA,
            detail="Metadata block has no title",
        )

    body = text[: match.start()] + text[match.end() :]
    return ParseResult(
        status=ParseStatus.OK,
        document=RenderedDocument(metadata=metadata, content=render_markdown(body)),
    )


def extract_document(text: str) -> RenderedDocument:
    """Parse ``text`` and raise a ContentError subclass when it is malformed."""

    return parse_document(text).unwrap()
