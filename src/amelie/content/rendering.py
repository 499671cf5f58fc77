"""Markdown to HTML conversion."""

from __future__ import annotations

import markdown

MARKDOWN_EXTENSIONS = ("fenced_code", "tables", "sane_lists")


def render_markdown(text: str) -> str:
    # markdown.Markdown instances keep state between calls; use a fresh one.
    return markdown.markdown(text, extensions=list(MARKDOWN_EXTENSIONS))
