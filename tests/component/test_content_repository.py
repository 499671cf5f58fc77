from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from amelie.errors import (
    ConfigUnavailableError,
    ManifestUnavailableError,
    PageNotFoundError,
    PostNotFoundError,
)
from amelie.repositories import ContentRepository, ContentRepositoryConfig


def _repository(root: Path) -> ContentRepository:
    return ContentRepository(ContentRepositoryConfig(root_dir=root))


def test_list_manifest(content_root: Path) -> None:
    posts = asyncio.run(_repository(content_root).list_manifest())
    assert posts == ["2019/12/31/c", "2020/01/01/b", "2020/01/02/a"]


def test_list_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ManifestUnavailableError) as excinfo:
        asyncio.run(_repository(tmp_path).list_manifest())
    assert isinstance(excinfo.value.__cause__, OSError)


@pytest.mark.parametrize("payload", ["{broken", '{"items": []}', '{"posts": "x"}', "[]"])
def test_list_manifest_bad_payload(content_root: Path, payload: str) -> None:
    (content_root / "blog" / "postList.json").write_text(payload, encoding="utf-8")
    with pytest.raises(ManifestUnavailableError):
        asyncio.run(_repository(content_root).list_manifest())


def test_load_post(content_root: Path) -> None:
    raw = asyncio.run(_repository(content_root).load_post("2020/01/02/a"))
    assert '"title": "Post a"' in raw
    assert "Content of a" in raw


def test_load_post_missing(content_root: Path) -> None:
    with pytest.raises(PostNotFoundError):
        asyncio.run(_repository(content_root).load_post("2021/01/01/nope"))


def test_load_post_rejects_path_escape(content_root: Path) -> None:
    (content_root / "secret.md").write_text("secret", encoding="utf-8")
    with pytest.raises(PostNotFoundError):
        asyncio.run(_repository(content_root).load_post("../secret"))


def test_load_page(content_root: Path) -> None:
    raw = asyncio.run(_repository(content_root).load_page("about"))
    assert "# About me" in raw


def test_load_page_missing(content_root: Path) -> None:
    with pytest.raises(PageNotFoundError):
        asyncio.run(_repository(content_root).load_page("contact"))


def test_read_config_file(content_root: Path) -> None:
    repository = _repository(content_root)
    assert asyncio.run(repository.read_config_file("navbar.md")) == "[About](/about)"
    with pytest.raises(ConfigUnavailableError):
        asyncio.run(repository.read_config_file("missing.json"))


def test_concurrent_loads(content_root: Path) -> None:
    repository = _repository(content_root)

    async def load_all() -> list[str]:
        return await asyncio.gather(
            repository.load_post("2020/01/02/a"),
            repository.load_post("2019/12/31/c"),
            repository.load_page("about"),
        )

    first, second, page = asyncio.run(load_all())
    assert "Post a" in first
    assert "Post c" in second
    assert "About" in page


def test_find_static_file(content_root: Path) -> None:
    images = content_root / "static" / "images"
    images.mkdir(parents=True)
    (images / "pic.png").write_bytes(b"png")
    repository = _repository(content_root)

    found = asyncio.run(repository.find_static_file("images/pic.png"))

    assert found == images / "pic.png"
    assert asyncio.run(repository.find_static_file("/images/pic.png")) == found
    assert asyncio.run(repository.find_static_file("images/none.png")) is None
    assert asyncio.run(repository.find_static_file("images")) is None


def test_find_static_file_rejects_path_escape(content_root: Path) -> None:
    (content_root / "static").mkdir()
    repository = _repository(content_root)

    assert asyncio.run(repository.find_static_file("../page/about.md")) is None
    assert asyncio.run(repository.find_static_file("")) is None


def test_relative_content_root_is_contained(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (content_root.parent / "secret.md").write_text("secret", encoding="utf-8")
    monkeypatch.chdir(content_root.parent)
    repository = _repository(Path(content_root.name))

    raw = asyncio.run(repository.load_post("2020/01/02/a"))

    assert "Post a" in raw
    with pytest.raises(PostNotFoundError):
        asyncio.run(repository.load_post("../../secret"))
