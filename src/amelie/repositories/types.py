"""リポジトリデータクラス"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from amelie.errors import MissingSettingError


# --- Config. ---
@dataclass(frozen=True, slots=True)
class ContentRepositoryConfig:
    """コンテンツディレクトリの読み込みに必要な設定値を束ねる。"""

    root_dir: Path
    encoding: str = "utf-8"
    manifest_name: str = "postList.json"

    def __post_init__(self) -> None:  # type: ignore[override]
        object.__setattr__(self, "root_dir", Path(self.root_dir).expanduser())

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> ContentRepositoryConfig:
        content_root = settings.get("content_root")
        if not content_root:
            raise MissingSettingError("content_root")
        encoding = settings.get("content_encoding", "utf-8")
        return cls(root_dir=Path(str(content_root)), encoding=encoding)

    @property
    def blog_dir(self) -> Path:
        return self.root_dir / "blog"

    @property
    def page_dir(self) -> Path:
        return self.root_dir / "page"

    @property
    def config_dir(self) -> Path:
        return self.root_dir / "config"

    @property
    def static_dir(self) -> Path:
        return self.root_dir / "static"

    @property
    def manifest_path(self) -> Path:
        return self.blog_dir / self.manifest_name
