from __future__ import annotations

import json
from pathlib import Path

import pytest


def _write_post(root: Path, identifier: str, title: str, body: str = "Body") -> Path:
    path = root / "blog" / f"{identifier}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f'@@:"title": "{title}", "date": "{identifier[:10]}":@@\n\n{body}\n', encoding="utf-8")
    return path


@pytest.fixture()
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    config_dir = root / "config"
    config_dir.mkdir(parents=True)
    (config_dir / "description.md").write_text("A *small* blog.", encoding="utf-8")
    (config_dir / "navbar.md").write_text("[About](/about)", encoding="utf-8")
    (config_dir / "app-config.json").write_text(
        json.dumps({"configTTL": 60000, "cacheMaxAge": 120}), encoding="utf-8"
    )
    (config_dir / "site-config.json").write_text(
        json.dumps(
            {
                "metaDescription": "Site description",
                "metaKeywords": "blog, notes",
                "metaAuthor": "Site Author",
                "defaultTitle": "Amelie Blog",
            }
        ),
        encoding="utf-8",
    )

    post_ids = ["2019/12/31/c", "2020/01/01/b", "2020/01/02/a"]
    for post_id in post_ids:
        _write_post(root, post_id, f"Post {post_id[-1]}", f"Content of {post_id[-1]}")
    (root / "blog" / "postList.json").write_text(
        json.dumps({"posts": post_ids}), encoding="utf-8"
    )

    page_dir = root / "page"
    page_dir.mkdir()
    (page_dir / "about.md").write_text(
        '@@:"title": "About", "metaAuthor": "Page Author":@@\n\n# About me\n',
        encoding="utf-8",
    )
    return root
