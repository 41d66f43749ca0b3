"""Tests for the config-driven batch conversion."""

from __future__ import annotations

from pathlib import Path

import frontmatter
import pytest
import requests
import yaml

from ingest import loader, run_all
from ingest.errors import ConfigError


class FakeResponse:
    def __init__(self, text: str) -> None:
        self.text = text

    def raise_for_status(self) -> None:
        pass


def write_cfg(tmp_path: Path, **extra) -> Path:
    cfg = {
        "paths": {
            "raw_dir": str(tmp_path / "raw"),
            "processed_dir": str(tmp_path / "processed"),
        },
        **extra,
    }
    path = tmp_path / "sources.yaml"
    path.write_text(yaml.safe_dump(cfg), encoding="utf-8")
    return path


def test_load_cfg_applies_defaults(tmp_path):
    cfg = run_all.load_cfg(write_cfg(tmp_path))
    assert cfg["parser"] == "html5lib"
    assert cfg["front_matter"] is True
    assert cfg["workers"] == 1
    assert cfg["urls"] == []


def test_load_cfg_requires_paths(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text("paths:\n  raw_dir: raw\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="processed_dir"):
        run_all.load_cfg(path)


def test_load_cfg_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        run_all.load_cfg(tmp_path / "missing.yaml")


def test_path_from_url_mirrors_path(tmp_path):
    out = run_all.path_from_url(str(tmp_path), "https://example.com/docs/intro/")
    assert Path(out) == tmp_path / "docs" / "intro" / "index.md"
    assert Path(out).parent.is_dir()


def test_path_from_file_mirrors_raw_dir(tmp_path):
    raw = tmp_path / "raw"
    out = run_all.path_from_file(str(raw), str(tmp_path / "out"), raw / "a" / "b.html")
    assert out == tmp_path / "out" / "a" / "b.md"


def test_main_converts_local_files_with_front_matter(tmp_path):
    raw = tmp_path / "raw" / "guides"
    raw.mkdir(parents=True)
    (raw / "start.html").write_text("<h1>Start</h1><p>Read me</p>", encoding="utf-8")

    assert run_all.main(["--config", str(write_cfg(tmp_path))]) == 0

    post = frontmatter.load(tmp_path / "processed" / "guides" / "start.md")
    assert post["kind"] == "file"
    assert post["source"].endswith("start.html")
    assert "last_converted" in post.metadata
    assert "# Start\n\nRead me" in post.content


def test_main_without_front_matter_writes_plain_markdown(tmp_path):
    raw = tmp_path / "raw"
    raw.mkdir()
    (raw / "index.html").write_text("<pre>a\nb</pre>", encoding="utf-8")

    assert run_all.main(["--config", str(write_cfg(tmp_path, front_matter=False))]) == 0
    text = (tmp_path / "processed" / "index.md").read_text(encoding="utf-8")
    assert text == "```\na\nb\n```\n\n"


def test_main_fetches_urls_and_reports_failures(tmp_path, monkeypatch):
    def fake_get(url, headers=None, timeout=None):
        if "broken" in url:
            raise requests.ConnectionError("down")
        return FakeResponse("<h2>Remote</h2>")

    monkeypatch.setattr(loader.requests, "get", fake_get)
    cfg = write_cfg(tmp_path, urls=["https://example.com/docs/page", "https://example.com/broken"])

    assert run_all.main(["--config", str(cfg)]) == 1

    post = frontmatter.load(tmp_path / "processed" / "docs" / "page.md")
    assert post["kind"] == "url"
    assert post.content.startswith("## Remote")
    assert not (tmp_path / "processed" / "broken.md").exists()


def test_main_bad_config_returns_error(tmp_path):
    assert run_all.main(["--config", str(tmp_path / "missing.yaml")]) == 1


def test_load_cfg_rejects_non_mapping(tmp_path):
    path = tmp_path / "sources.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        run_all.load_cfg(path)


def test_main_unknown_parser_fails_per_document(tmp_path):
    raw = tmp_path / "raw"
    raw.mkdir()
    (raw / "a.html").write_text("<p>a</p>", encoding="utf-8")
    (raw / "b.html").write_text("<p>b</p>", encoding="utf-8")

    assert run_all.main(["--config", str(write_cfg(tmp_path, parser="no-such-parser"))]) == 1
    assert not (tmp_path / "processed" / "a.md").exists()
    assert not (tmp_path / "processed" / "b.md").exists()


def test_main_unwritable_output_does_not_stop_batch(tmp_path):
    raw = tmp_path / "raw"
    raw.mkdir()
    (raw / "a.html").write_text("<p>a</p>", encoding="utf-8")
    (raw / "b.html").write_text("<p>b</p>", encoding="utf-8")
    # a directory where a.md should go makes the write fail
    (tmp_path / "processed" / "a.md").mkdir(parents=True)

    assert run_all.main(["--config", str(write_cfg(tmp_path, front_matter=False))]) == 1
    assert (tmp_path / "processed" / "b.md").read_text(encoding="utf-8") == "b\n\n"
