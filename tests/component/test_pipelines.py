from __future__ import annotations

import logging
from pathlib import Path

import pytest

from amelie import pipelines
from amelie.errors import AmelieError


def test_run_check_clean_content(content_root: Path) -> None:
    result = pipelines.run_check(
        {"content_root": str(content_root), "config_path": str(content_root / "none.toml")}
    )
    assert result == 0


def test_run_check_reports_malformed_post(content_root: Path, caplog: pytest.LogCaptureFixture) -> None:
    (content_root / "blog" / "2020" / "01" / "01" / "b.md").write_text(
        "@@:not json:@@", encoding="utf-8"
    )

    amelie_logger = logging.getLogger("amelie")
    amelie_logger.addHandler(caplog.handler)
    try:
        result = pipelines.run_check(
            {"content_root": str(content_root), "config_path": str(content_root / "none.toml")}
        )
    finally:
        amelie_logger.removeHandler(caplog.handler)

    assert result == 1
    assert any("2020/01/01/b" in record.getMessage() for record in caplog.records)


def test_run_check_missing_manifest(tmp_path: Path) -> None:
    result = pipelines.run_check(
        {"content_root": str(tmp_path), "config_path": str(tmp_path / "none.toml")}
    )
    assert result == 1


def test_run_serve_requires_existing_root(tmp_path: Path) -> None:
    with pytest.raises(AmelieError) as excinfo:
        pipelines.run_serve(
            {
                "content_root": str(tmp_path / "missing"),
                "config_path": str(tmp_path / "none.toml"),
            }
        )
    assert excinfo.value.hint


def test_run_serve_starts_uvicorn(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_run(app, host, port, log_level):
        called.update(app=app, host=host, port=port, log_level=log_level)

    monkeypatch.setattr(pipelines.uvicorn, "run", fake_run)

    result = pipelines.run_serve(
        {
            "content_root": str(content_root),
            "config_path": str(content_root / "none.toml"),
            "port": 9123,
        }
    )

    assert result == 0
    assert called["port"] == 9123
    assert called["host"] == "127.0.0.1"
    assert called["log_level"] == "info"
