"""Tests for utility class extraction and content glob expansion."""

from __future__ import annotations

from pathlib import Path

from folio.css.scanner import collect_classes, expand_content_globs, extract_classes


class TestExtractClasses:
    def test_double_and_single_quotes(self) -> None:
        html = """<div class="px-4 py-2"><span class='font-bold'>x</span></div>"""
        assert extract_classes(html) == {"px-4", "py-2", "font-bold"}

    def test_template_expressions_dropped_literals_kept(self) -> None:
        html = '<a class="px-4 {% if active %}font-bold{% endif %} {{ extra }}">'
        assert extract_classes(html) == {"px-4", "font-bold"}

    def test_variants_and_arbitrary_values(self) -> None:
        html = '<p class="md:hover:text-blue-600 w-[37rem] w-1/2">'
        assert extract_classes(html) == {"md:hover:text-blue-600", "w-[37rem]", "w-1/2"}

    def test_lookalike_attributes_ignored(self) -> None:
        html = '<div data-class="hidden" :class="{ open: flag }" class="flex">'
        assert extract_classes(html) == {"flex"}

    def test_markdown_attribute_list(self) -> None:
        md = "A paragraph.\n{: .text-slate-600 .mt-4 #anchor }\n"
        assert extract_classes(md) == {"text-slate-600", "mt-4"}


class TestCollect:
    def test_expand_globs_skips_dirs_and_vendor(self, tmp_path: Path) -> None:
        (tmp_path / "_layouts").mkdir()
        (tmp_path / "_layouts" / "default.html").write_text('<div class="flex">')
        (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
        (tmp_path / "node_modules" / "pkg" / "x.html").write_text('<div class="hidden">')
        (tmp_path / "index.html").write_text('<p class="mt-4">')

        files = expand_content_globs(tmp_path, ["./**/*.html"])
        names = [f.relative_to(tmp_path).as_posix() for f in files]
        assert names == ["_layouts/default.html", "index.html"]

    def test_collect_sorted_union(self, tmp_path: Path) -> None:
        a = tmp_path / "a.html"
        b = tmp_path / "b.html"
        a.write_text('<div class="mt-4 flex">')
        b.write_text('<div class="flex block">')
        assert collect_classes([a, b]) == ["block", "flex", "mt-4"]

    def test_undecodable_file_skipped(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.html"
        bad.write_bytes(b"\xff\xfe\x00class=")
        assert collect_classes([bad]) == []
