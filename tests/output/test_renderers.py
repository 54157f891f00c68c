"""Tests for operation-specific Rich renderers."""

from folio.output.renderers import render_quiet, render_result
from folio.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("create_post", "VALIDATION_FAILED", "Title must not be empty"))
        assert "ERROR" in output
        assert "create_post" in output
        assert "[VALIDATION_FAILED]" in output
        assert "Title must not be empty" in output

    def test_markup_in_message_is_literal(self) -> None:
        output = render_result(_err("build", "TEMPLATE_ERROR", "index.html: unexpected '[bold]'"))
        assert "[bold]" in output

    def test_duplicates_listed(self) -> None:
        result = _err(
            "build",
            "BUILD_FAILED",
            "1 URL(s) produced by more than one source",
            duplicates=[{"url": "/about.html", "sources": ["about.html", "about.md"]}],
        )
        assert "/about.html: about.html, about.md" in render_result(result)

    def test_verbose_shows_detail(self) -> None:
        output = render_result(_err("build", "TEMPLATE_ERROR", "Bad", source="index.html"), verbose=True)
        assert "detail" in output
        assert "source: index.html" in output

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Build and CSS ────────────────────────────────────────────────────


class TestBuildRenderer:
    def test_summary(self) -> None:
        result = _ok(
            "build",
            output_dir="/site/_site",
            post_count=3,
            page_count=6,
            static_count=2,
            draft_count=0,
            hidden_count=1,
            files_written=["index.html", "feed.xml"],
            css={"output": "assets/css/site.css", "rule_count": 42, "class_count": 40, "unknown_count": 0},
            plugins={"sitemap": ["sitemap.xml"], "feed": ["feed.xml"]},
        )
        output = render_result(result)
        assert output.splitlines()[0].split() == ["OK", "build"]
        assert "post_count: 3" in output
        assert "hidden_count: 1" in output
        assert "draft_count" not in output
        assert "assets/css/site.css (42 rules)" in output
        assert "plugins: feed, sitemap" in output
        assert "files_written: 2" in output
        assert "    feed.xml" not in output

    def test_verbose_lists_files(self) -> None:
        result = _ok("build", output_dir="/x", files_written=["index.html", "feed.xml"])
        output = render_result(result, verbose=True)
        assert "    index.html" in output
        assert "    feed.xml" in output

    def test_css_unknown_classes_verbose(self) -> None:
        result = _ok(
            "build_css",
            output="assets/css/site.css",
            files_scanned=4,
            class_count=10,
            rule_count=11,
            bytes=900,
            minified=True,
            unknown_count=2,
            unknown=["card", "[weird]"],
        )
        quiet_view = render_result(result)
        assert "unknown_count: 2" in quiet_view
        assert "card" not in quiet_view
        assert "minified: True" in quiet_view
        assert "card [weird]" in render_result(result, verbose=True)


# ── Check ────────────────────────────────────────────────────────────


class TestCheckRenderer:
    def test_no_issues(self) -> None:
        output = render_result(_ok("check", issues=[], count=0, error_count=0))
        assert "No issues found." in output

    def test_grouped_issues(self) -> None:
        issues = [
            {"category": "frontmatter", "severity": "error", "source": "_posts/a.md", "message": "Missing 'title' in front matter", "fix_action": "derive_title"},
            {"category": "seo", "severity": "warning", "source": "blog.html", "message": "Duplicate title 'Blog'", "fix_action": None},
            {"category": "output", "severity": "error", "source": None, "message": "sitemap.xml is missing", "fix_action": None},
        ]
        output = render_result(_ok("check", issues=issues, count=3, error_count=2))
        assert "frontmatter" in output
        assert "error _posts/a.md: Missing 'title' in front matter" in output
        assert "warning blog.html: Duplicate title 'Blog'" in output
        assert "error: sitemap.xml is missing" in output
        assert "2 errors, 1 warnings" in output
        assert "fix:" not in output
        assert "fix: derive_title" in render_result(
            _ok("check", issues=issues, count=3, error_count=2), verbose=True
        )

    def test_fix(self) -> None:
        output = render_result(_ok("fix", fixes=["a.md: set layout to 'post'"], count=1))
        assert "fixes_applied: 1" in output
        assert "- a.md: set layout to 'post'" in output


# ── Content ──────────────────────────────────────────────────────────


class TestContentRenderers:
    def test_created_post(self) -> None:
        result = _ok(
            "create_post",
            path="_posts/2024-01-01-hi.md",
            title="Hi",
            url="/blog/2024/01/01/hi/",
            date="2024-01-01",
            tags=["a", "b"],
            draft=False,
        )
        output = render_result(result)
        assert output.splitlines()[0].split() == ["OK", "create_post"]
        assert "path: _posts/2024-01-01-hi.md" in output
        assert "tags: a, b" in output
        assert "draft" not in output

    def test_created_draft_note(self) -> None:
        output = render_result(_ok("create_post", path="_drafts/hi.md", title="Hi", draft=True))
        assert "draft: not published" in output

    def test_post_table(self) -> None:
        items = [
            {"title": "Newest", "date": "2024-02-01", "url": "/n/", "tags": ["x"], "source": "_posts/n.md", "draft": False, "visible": True},
            {"title": "Later", "date": "2999-01-01", "url": "/l/", "tags": [], "source": "_posts/l.md", "draft": False, "visible": False},
            {"title": "Idea", "date": "2024-01-01", "url": "/i/", "tags": [], "source": "_drafts/i.md", "draft": True, "visible": True},
        ]
        output = render_result(_ok("list_posts", items=items, count=3, total=5))
        assert "Newest" in output
        assert "Later [hidden]" in output
        assert "Idea [draft]" in output
        assert "3 of 5 posts" in output
        assert "_posts/n.md" not in output
        assert "_posts/n.md" in render_result(_ok("list_posts", items=items, count=3, total=3), verbose=True)

    def test_init(self) -> None:
        output = render_result(
            _ok("init_site", path="/tmp/s", title="S", url="https://s.dev", files=["folio.toml", "index.html"])
        )
        assert output.splitlines()[0].split() == ["OK", "init_site"]
        assert "files_created: 2" in output


# ── Generic and quiet ────────────────────────────────────────────────


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("something_new", alpha=1, nested={"k": [1, 2]}))
        assert output.splitlines()[0].split() == ["OK", "something_new"]
        assert "alpha: 1" in output
        assert 'nested: {"k":[1,2]}' in output

    def test_verbose_meta_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="build",
            data={"output_dir": "/x"},
            meta={"telemetry": {"name": "BuildService.build", "duration_ms": 12.5, "children": [{"name": "load", "duration_ms": 2.0, "annotations": {"posts": 3}}]}},
        )
        output = render_result(result, verbose=True)
        assert "BuildService.build" in output
        assert "load  (posts=3)" in output


class TestQuiet:
    def test_error(self) -> None:
        assert render_quiet(_err("build", "NO_SITE", "No folio site found")) == "ERROR: build: No folio site found"

    def test_listing_prints_urls(self) -> None:
        items = [{"url": "/a/"}, {"url": "/b/"}]
        assert render_quiet(_ok("list_posts", items=items)) == "/a/\n/b/"

    def test_created_prints_path(self) -> None:
        assert render_quiet(_ok("create_page", path="about.html")) == "about.html"

    def test_other_ops(self) -> None:
        assert render_quiet(_ok("build", output_dir="/x")) == "OK: build"
