"""Amelie: a small markdown blog server.

The web layer, content repository and blogroll services are importable from
the package root; they are loaded on first access so ``amelie --version``
does not pay for FastAPI and Markdown imports.
"""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError, version

from amelie.errors import AmelieError

try:
    __version__ = version("amelie")
except PackageNotFoundError:  # pragma: no cover - source checkout without install
    __version__ = "0+unknown"

_LAZY_EXPORTS = {
    "create_app": "amelie.web",
    "ContentRepository": "amelie.repositories",
    "ContentRepositoryConfig": "amelie.repositories",
    "BlogrollAssembler": "amelie.services",
    "SiteConfigCache": "amelie.services",
    "extract_document": "amelie.content",
}


def __getattr__(name: str) -> object:
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'amelie' has no attribute {name!r}")
    value = getattr(import_module(module_name), name)
    globals()[name] = value
    return value


__all__ = ["AmelieError", "__version__", *_LAZY_EXPORTS]
