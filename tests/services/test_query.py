"""Tests for QueryService.list_posts."""

from __future__ import annotations

from pathlib import Path

import pytest

from folio.infrastructure.site import Site
from folio.services.query import QueryService
from folio.services.result import ErrorCode
from tests.conftest import make_site, write_post


@pytest.fixture
def blog(site_root: Path) -> Site:
    write_post(site_root, "2024-03-01-css-tricks.md", title="CSS Tricks", tags=["css"])
    write_post(site_root, "2024-02-01-python-tips.md", title="Python Tips", tags=["python"])
    write_post(site_root, "2024-01-01-more-css.md", title="More CSS", tags=["css", "python"])
    write_post(site_root, "2999-01-01-someday.md", title="Someday")
    write_post(site_root, "2023-01-01-retracted.md", title="Retracted", published=False)
    write_post(site_root, "idea.md", directory="_drafts", title="Idea")
    return make_site(site_root)


class TestListPosts:
    def test_newest_first(self, blog: Site) -> None:
        result = QueryService(blog).list_posts()
        assert result.ok
        titles = [item["title"] for item in result.data["items"]]
        assert titles == ["Welcome to Test Blog", "CSS Tricks", "Python Tips", "More CSS"]
        assert result.data["count"] == result.data["total"] == 4

    def test_row_shape(self, blog: Site) -> None:
        row = QueryService(blog).list_posts(tag="python", limit=1).data["items"][0]
        assert row == {
            "title": "Python Tips",
            "date": "2024-02-01",
            "url": "/blog/2024/02/01/python-tips/",
            "tags": ["python"],
            "source": "_posts/2024-02-01-python-tips.md",
            "draft": False,
            "published": True,
            "visible": True,
        }

    def test_tag_filter(self, blog: Site) -> None:
        items = QueryService(blog).list_posts(tag="css").data["items"]
        assert [i["title"] for i in items] == ["CSS Tricks", "More CSS"]

    def test_limit_keeps_total(self, blog: Site) -> None:
        data = QueryService(blog).list_posts(limit=2).data
        assert data["count"] == 2
        assert data["total"] == 4

    def test_include_unpublished(self, blog: Site) -> None:
        items = QueryService(blog).list_posts(include_unpublished=True).data["items"]
        by_title = {i["title"]: i for i in items}
        assert set(by_title) == {
            "Welcome to Test Blog",
            "CSS Tricks",
            "Python Tips",
            "More CSS",
            "Someday",
            "Retracted",
            "Idea",
        }
        assert items[0]["title"] == "Someday"
        assert by_title["Someday"]["visible"] is False
        assert by_title["Retracted"]["published"] is False
        assert by_title["Idea"]["draft"] is True

    def test_invalid_limit(self, blog: Site) -> None:
        result = QueryService(blog).list_posts(limit=0)
        assert result.error is not None
        assert result.error.code == ErrorCode.VALIDATION_FAILED

    def test_skipped_files_are_warnings(self, site: Site, site_root: Path) -> None:
        write_post(site_root, "undated.md", title="Undated")
        result = QueryService(site).list_posts()
        assert result.ok
        assert result.warnings[0].startswith("Skipped _posts/undated.md")

    def test_no_site(self, tmp_path: Path) -> None:
        result = QueryService(make_site(tmp_path)).list_posts()
        assert result.error is not None
        assert result.error.code == ErrorCode.NO_SITE
