"""Site-wide display settings, reloaded from the content directory after a TTL."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from amelie import config
from amelie.content import render_markdown
from amelie.errors import AmelieError, ConfigUnavailableError
from amelie.logging import get_logger
from amelie.repositories import ContentRepository
from amelie.utils import gather_ordered

CONFIG_FILES = ("description.md", "navbar.md", "app-config.json", "site-config.json")


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """描画時に参照するサイト設定のスナップショット。"""

    description: str = ""
    navbar: str = ""
    meta_description: str = ""
    meta_keywords: str = ""
    meta_author: str = ""
    default_title: str = ""
    current_year: int = 0
    config_ttl_ms: int = 1800000
    cache_max_age: int = 300
    last_refreshed: float | None = None

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> SiteConfig:
        return cls(
            config_ttl_ms=config.get_int_setting(settings, "config_ttl"),
            cache_max_age=config.get_int_setting(settings, "cache_max_age"),
        )

    @property
    def ttl_seconds(self) -> float:
        return self.config_ttl_ms / 1000

    def cache_control(self) -> str:
        return f"public, max-age={self.cache_max_age}"


def _parse_json_object(name: str, raw: str) -> dict[str, Any]:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise ConfigUnavailableError(f"Invalid JSON in {name}") from exc
    if not isinstance(payload, dict):
        raise ConfigUnavailableError(f"{name} must contain a JSON object")
    return payload


def _int_option(payload: Mapping[str, Any], key: str, fallback: int) -> int:
    value = payload.get(key)
    if not value:
        return fallback
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigUnavailableError(f"`{key}` must be a number, got {value!r}") from exc


class SiteConfigCache:
    """SiteConfig を保持し、TTL 切れで再読み込みする。"""

    def __init__(
        self,
        repository: ContentRepository,
        *,
        defaults: SiteConfig | None = None,
        clock: Callable[[], float] = time.time,
        verbose: bool = False,
    ) -> None:
        self._repository = repository
        self._defaults = defaults or SiteConfig()
        self._current = self._defaults
        self._clock = clock
        self._refresh_task: asyncio.Task[bool] | None = None
        self._logger = get_logger("amelie.site_config", verbose)

    @property
    def current(self) -> SiteConfig:
        return self._current

    def is_expired(self) -> bool:
        last = self._current.last_refreshed
        if last is None:
            return True
        return self._clock() - last > self._current.ttl_seconds

    async def refresh(self) -> bool:
        """Reload all config files; keep the previous snapshot on any failure."""

        try:
            snapshot = await self._load_snapshot()
        except AmelieError as exc:
            self._logger.error("Site config refresh failed: %s", exc)
            return False
        self._current = snapshot
        self._logger.info(
            "Site config refreshed (ttl=%sms, max-age=%ss)",
            snapshot.config_ttl_ms,
            snapshot.cache_max_age,
        )
        return True

    def ensure_fresh(self) -> SiteConfig:
        """Schedule a background refresh when expired and return the current snapshot."""

        if self.is_expired() and not self.refresh_in_flight:
            self._refresh_task = asyncio.get_running_loop().create_task(self.refresh())
        return self._current

    @property
    def refresh_in_flight(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    async def wait_for_refresh(self) -> None:
        if self._refresh_task is not None:
            await self._refresh_task

    async def _load_snapshot(self) -> SiteConfig:
        description, navbar, app_raw, site_raw = await gather_ordered(
            self._repository.read_config_file(name) for name in CONFIG_FILES
        )
        app_config = _parse_json_object("app-config.json", app_raw)
        site_config = _parse_json_object("site-config.json", site_raw)
        previous = self._current
        now = self._clock()

        return replace(
            previous,
            description=render_markdown(description),
            navbar=render_markdown(navbar),
            meta_description=site_config.get("metaDescription") or previous.meta_description,
            meta_keywords=site_config.get("metaKeywords") or previous.meta_keywords,
            meta_author=site_config.get("metaAuthor") or previous.meta_author,
            default_title=site_config.get("defaultTitle") or previous.default_title,
            current_year=datetime.fromtimestamp(now).year,
            config_ttl_ms=_int_option(app_config, "configTTL", previous.config_ttl_ms),
            cache_max_age=_int_option(app_config, "cacheMaxAge", previous.cache_max_age),
            last_refreshed=now,
        )
