"""Document data classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from amelie.errors import ContentError, MalformedDocumentError, MalformedMetadataError


def lookup_field(metadata: Mapping[str, Any], name: str) -> Any:
    """Return a metadata value, matching the key case-insensitively."""

    if name in metadata:
        return metadata[name]
    lowered = name.lower()
    for key, value in metadata.items():
        if key.lower() == lowered:
            return value
    return None


@dataclass(frozen=True, slots=True)
class RenderedDocument:
    """テンプレートへ渡す1件分のビューモデル。"""

    metadata: dict[str, Any]
    content: str
    identifier: str | None = None

    def get(self, name: str, default: Any = None) -> Any:
        value = lookup_field(self.metadata, name)
        return default if value is None else value

    @property
    def title(self) -> str:
        return str(self.get("title", ""))

    @property
    def date(self) -> str:
        return str(self.get("date", ""))

    @property
    def link(self) -> str:
        return str(self.get("link", ""))

    @property
    def is_link_post(self) -> bool:
        return bool(self.get("linkPost", False)) and bool(self.link)

    @property
    def permalink(self) -> str:
        explicit = self.get("permalink")
        if explicit:
            return str(explicit)
        if self.identifier:
            return f"/blog/{self.identifier}/"
        return ""

    def with_identifier(self, identifier: str) -> RenderedDocument:
        return RenderedDocument(
            metadata=self.metadata, content=self.content, identifier=identifier
        )


class ParseStatus(str, Enum):
    OK = "ok"
    MALFORMED_DOCUMENT = "malformed_document"
    MALFORMED_METADATA = "malformed_metadata"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing one raw document."""

    status: ParseStatus
    document: RenderedDocument | None = None
    detail: str = ""
    _cause: Exception | None = field(default=None, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK

    def unwrap(self) -> RenderedDocument:
        if self.status is ParseStatus.OK and self.document is not None:
            return self.document
        error: ContentError
        if self.status is ParseStatus.MALFORMED_DOCUMENT:
            error = MalformedDocumentError(self.detail)
        else:
            error = MalformedMetadataError(self.detail)
        if self._cause is not None:
            raise error from self._cause
        raise error
