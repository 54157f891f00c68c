"""Tests for content discovery and output file I/O."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.config.settings import FolioSettings
from folio.infrastructure.filesystem import (
    clean_output,
    copy_static,
    find_drafts,
    find_pages,
    find_posts,
    find_static_files,
    read_content_file,
    resolve_output_path,
    write_content_file,
    write_output_file,
)
from tests.conftest import write_page, write_post


def _settings(root: Path) -> FolioSettings:
    return FolioSettings.from_cli(site_root=root)


class TestContentFiles:
    def test_write_then_read(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "post.md"
        write_content_file(path, {"title": "Hello", "tags": ["a"]}, "Body\n")
        fm, body = read_content_file(path)
        assert fm == {"title": "Hello", "tags": ["a"]}
        assert body == "Body\n"

    def test_read_without_frontmatter(self, tmp_path: Path) -> None:
        path = tmp_path / "plain.md"
        path.write_text("Just text.\n", encoding="utf-8")
        assert read_content_file(path) == ({}, "Just text.\n")


class TestOutputPaths:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("/", "index.html"),
            ("/blog/2024/01/02/hello/", "blog/2024/01/02/hello/index.html"),
            ("/about.html", "about.html"),
        ],
    )
    def test_resolve(self, tmp_path: Path, url: str, expected: str) -> None:
        assert resolve_output_path(tmp_path, url) == tmp_path / expected

    def test_escape_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="escapes output root"):
            resolve_output_path(tmp_path / "_site", "/../escape.html")

    def test_write_output_creates_dirs(self, tmp_path: Path) -> None:
        dest = write_output_file(tmp_path, "/blog/hello/", "<p>hi</p>")
        assert dest == tmp_path / "blog" / "hello" / "index.html"
        assert dest.read_text(encoding="utf-8") == "<p>hi</p>"


class TestDiscovery:
    def test_find_posts_recursive_and_filtered(self, tmp_path: Path) -> None:
        write_post(tmp_path, "2024-01-01-a.md")
        write_post(tmp_path, "travel/2024-02-01-b.markdown")
        (tmp_path / "_posts" / "notes.txt").write_text("x", encoding="utf-8")
        found = [p.relative_to(tmp_path).as_posix() for p in find_posts(tmp_path, "_posts")]
        assert found == ["_posts/2024-01-01-a.md", "_posts/travel/2024-02-01-b.markdown"]

    def test_missing_posts_dir(self, tmp_path: Path) -> None:
        assert find_posts(tmp_path, "_posts") == []
        assert find_drafts(tmp_path, "_drafts") == []

    def test_pages_need_frontmatter(self, tmp_path: Path) -> None:
        write_page(tmp_path, "about.html", title="About")
        (tmp_path / "raw.html").write_text("<p>no front matter</p>", encoding="utf-8")
        settings = _settings(tmp_path)
        assert [p.name for p in find_pages(tmp_path, settings)] == ["about.html"]
        assert "raw.html" in [p.name for p in find_static_files(tmp_path, settings)]

    def test_underscore_dot_and_output_dirs_skipped(self, tmp_path: Path) -> None:
        write_post(tmp_path, "2024-01-01-a.md")
        (tmp_path / "_site").mkdir()
        (tmp_path / "_site" / "index.html").write_text("old", encoding="utf-8")
        (tmp_path / ".cache").mkdir()
        (tmp_path / ".cache" / "x.css").write_text("", encoding="utf-8")
        (tmp_path / "_draft.css").write_text("", encoding="utf-8")
        (tmp_path / "folio.toml").write_text("", encoding="utf-8")
        (tmp_path / "assets").mkdir()
        (tmp_path / "assets" / "app.js").write_text("", encoding="utf-8")

        static = find_static_files(tmp_path, _settings(tmp_path))
        assert [p.relative_to(tmp_path).as_posix() for p in static] == ["assets/app.js"]

    def test_nested_output_dir_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "build" / "out").mkdir(parents=True)
        (tmp_path / "build" / "out" / "index.html").write_text("old", encoding="utf-8")
        (tmp_path / "build" / "notes.txt").write_text("keep", encoding="utf-8")
        settings = FolioSettings.from_cli(site_root=tmp_path, build={"output_dir": "build/out"})
        static = find_static_files(tmp_path, settings)
        assert [p.relative_to(tmp_path).as_posix() for p in static] == ["build/notes.txt"]

    def test_exclude_patterns(self, tmp_path: Path) -> None:
        (tmp_path / "README.md").write_text("# readme", encoding="utf-8")
        (tmp_path / "LICENSE.txt").write_text("MIT", encoding="utf-8")
        (tmp_path / "favicon.ico").write_bytes(b"\x00")
        static = find_static_files(tmp_path, _settings(tmp_path))
        assert [p.name for p in static] == ["favicon.ico"]


class TestStaticAndClean:
    def test_copy_static_preserves_paths(self, tmp_path: Path) -> None:
        src = tmp_path / "assets" / "img" / "logo.svg"
        src.parent.mkdir(parents=True)
        src.write_text("<svg/>", encoding="utf-8")
        out = tmp_path / "_site"
        assert copy_static([src], tmp_path, out) == ["assets/img/logo.svg"]
        assert (out / "assets" / "img" / "logo.svg").read_text(encoding="utf-8") == "<svg/>"

    def test_clean_output_keeps_directory(self, tmp_path: Path) -> None:
        out = tmp_path / "_site"
        (out / "blog").mkdir(parents=True)
        (out / "blog" / "index.html").write_text("x", encoding="utf-8")
        (out / "robots.txt").write_text("x", encoding="utf-8")
        clean_output(out)
        assert out.is_dir()
        assert list(out.iterdir()) == []

    def test_clean_missing_output_is_noop(self, tmp_path: Path) -> None:
        clean_output(tmp_path / "_site")
        assert not (tmp_path / "_site").exists()
