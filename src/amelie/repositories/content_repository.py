from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import aiofiles
import aiofiles.os

from amelie.errors import (
    ConfigUnavailableError,
    ManifestUnavailableError,
    PageNotFoundError,
    PostNotFoundError,
)

from .types import ContentRepositoryConfig


@dataclass(slots=True)
class ContentRepository:
    """コンテンツディレクトリ（投稿・固定ページ・設定）の読み込みを担当する。"""

    config: ContentRepositoryConfig

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ContentRepository:
        return cls(ContentRepositoryConfig.from_settings(settings))

    async def list_manifest(self) -> list[str]:
        """postList.json の posts 配列を返す。"""

        path = self.config.manifest_path
        try:
            raw = await self._read_text(path)
            payload = json.loads(raw)
        except OSError as exc:
            raise ManifestUnavailableError(f"Failed to read manifest: {path}") from exc
        except ValueError as exc:
            raise ManifestUnavailableError(f"Invalid manifest JSON: {path}") from exc

        posts = payload.get("posts") if isinstance(payload, dict) else None
        if not isinstance(posts, list):
            raise ManifestUnavailableError(
                f"Manifest has no `posts` array: {path}",
                hint='Expected {"posts": ["2016/03/15/my-post", ...]}.',
            )
        return [str(post) for post in posts]

    async def load_post(self, identifier: str) -> str:
        """blog/<identifier>.md を読み込む。"""

        try:
            path = self._resolve(self.config.blog_dir, identifier)
            return await self._read_text(path)
        except (OSError, ValueError) as exc:
            raise PostNotFoundError(f"Post not found: {identifier}") from exc

    async def load_page(self, slug: str) -> str:
        """page/<slug>.md を読み込む。"""

        try:
            path = self._resolve(self.config.page_dir, slug)
            return await self._read_text(path)
        except (OSError, ValueError) as exc:
            raise PageNotFoundError(f"Page not found: {slug}") from exc

    async def read_config_file(self, name: str) -> str:
        path = self.config.config_dir / name
        try:
            return await self._read_text(path)
        except (OSError, ValueError) as exc:
            raise ConfigUnavailableError(f"Failed to read config file: {path}") from exc

    async def find_static_file(self, relative_path: str) -> Path | None:
        """static/ 配下の実在ファイルを返す。無ければ None。"""

        try:
            path = self._contained(self.config.static_dir, relative_path)
        except ValueError:
            return None
        if not await aiofiles.os.path.isfile(path):
            return None
        return path

    def _resolve(self, base_dir: Path, name: str) -> Path:
        """base_dir 配下の <name>.md を返す。配下から外れる指定は ValueError。"""

        return self._contained(base_dir, f"{name.strip('/')}.md")

    @staticmethod
    def _contained(base_dir: Path, relative_path: str) -> Path:
        # Lexical check only; no filesystem calls on the event loop.
        base = os.path.normpath(os.path.abspath(base_dir))
        target = os.path.normpath(os.path.join(base, relative_path.lstrip("/")))
        if target == base or os.path.commonpath([base, target]) != base:
            raise ValueError(f"Path escapes content root: {relative_path}")
        return Path(target)

    async def _read_text(self, path: Path) -> str:
        async with aiofiles.open(path, "r", encoding=self.config.encoding) as handle:
            return await handle.read()
