"""Template context builders."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from amelie.content import RenderedDocument
from amelie.services import SiteConfig

SEO_FIELDS = {
    "meta_description": "metaDescription",
    "meta_keywords": "metaKeywords",
    "meta_author": "metaAuthor",
}


def build_context(
    site: SiteConfig,
    *,
    document: RenderedDocument | None = None,
    posts: Sequence[RenderedDocument] = (),
    page: str | None = None,
    read_more: bool = False,
) -> dict[str, Any]:
    """Merge site defaults with per-document overrides for the page template."""

    context: dict[str, Any] = {
        "site_title": site.default_title,
        "title": site.default_title,
        "navbar": site.navbar,
        "description": site.description,
        "copyright_year": site.current_year,
        "posts": list(posts),
        "page": page,
        "read_more": read_more,
    }
    for context_key, metadata_key in SEO_FIELDS.items():
        override = document.get(metadata_key) if document is not None else None
        context[context_key] = override or getattr(site, context_key)
    if document is not None and document.title:
        context["title"] = document.title
    return context
