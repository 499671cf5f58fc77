# src/amelie/errors.py
from __future__ import annotations


class AmelieError(Exception):
    """Base exception for all amelie errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigError(AmelieError):
    """Raised when config is missing or invalid."""


class MissingSettingError(ConfigError):
    """Raised when a required configuration value is absent."""

    def __init__(self, setting_name: str, message: str | None = None) -> None:
        detail = message or f"Missing required setting: {setting_name}"
        super().__init__(
            detail,
            hint=f"Set `{setting_name}` in config.toml or export AMELIE_{setting_name.upper()}.",
        )
        self.setting_name = setting_name


class ConfigUnavailableError(ConfigError):
    """Raised when a site config file cannot be read or parsed."""


class ContentError(AmelieError):
    """Base error for markdown documents that cannot be rendered."""


class MalformedDocumentError(ContentError):
    """Raised when a document has no `@@:...:@@` metadata block."""


class MalformedMetadataError(ContentError):
    """Raised when the metadata block is not a usable JSON object."""


class RepositoryError(AmelieError):
    """Base error for repository related failures."""


class ManifestUnavailableError(RepositoryError):
    """Raised when postList.json cannot be read or parsed."""


class PostNotFoundError(RepositoryError):
    """Raised when a post file cannot be read."""


class PageNotFoundError(RepositoryError):
    """Raised when a page file cannot be read."""
