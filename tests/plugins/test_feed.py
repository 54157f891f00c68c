"""Tests for the built-in Atom feed plugin."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from folio.config.models import FeedConfig, SiteConfig
from folio.domain.content import Post
from folio.plugins.builtins.feed import ATOM_NS, SUMMARY_WORDS, build_feed
from tests.conftest import build_site, make_site, write_post

NS = {"a": ATOM_NS}
SITE = SiteConfig(title="Notes", url="https://example.com", author="Ada", description="Writing.")


def _post(name: str, body: str = "Body.", **fm: object) -> Post:
    return Post.from_source(f"_posts/{name}", {"title": name, **fm}, body, permalink="/blog/{slug}/")


def _parse(xml: bytes) -> ET.Element:
    return ET.fromstring(xml)


class TestBuildFeed:
    def test_channel_metadata(self) -> None:
        root = _parse(build_feed([_post("2024-03-01-b.md")], SITE, FeedConfig()))
        assert root.findtext("a:title", namespaces=NS) == "Notes"
        assert root.findtext("a:subtitle", namespaces=NS) == "Writing."
        assert root.findtext("a:id", namespaces=NS) == "https://example.com/"
        assert root.findtext("a:author/a:name", namespaces=NS) == "Ada"
        self_link = root.find("a:link[@rel='self']", NS)
        assert self_link is not None
        assert self_link.get("href") == "https://example.com/feed.xml"

    def test_updated_is_newest_post(self) -> None:
        posts = [_post("2024-03-01-b.md"), _post("2024-01-01-a.md")]
        root = _parse(build_feed(posts, SITE, FeedConfig()))
        assert root.findtext("a:updated", namespaces=NS) == "2024-03-01T00:00:00+00:00"

    def test_limit(self) -> None:
        posts = [_post("2024-03-01-b.md"), _post("2024-01-01-a.md")]
        root = _parse(build_feed(posts, SITE, FeedConfig(limit=1)))
        entries = root.findall("a:entry", NS)
        assert [e.findtext("a:id", namespaces=NS) for e in entries] == ["https://example.com/blog/b/"]

    def test_entry_fields(self) -> None:
        post = _post("2024-03-01-b.md", author="Grace", tags=["python", "seo"], description="Short.")
        entry = _parse(build_feed([post], SITE, FeedConfig())).find("a:entry", NS)
        assert entry is not None
        assert entry.findtext("a:title", namespaces=NS) == "2024-03-01-b.md"
        assert entry.findtext("a:id", namespaces=NS) == "https://example.com/blog/b/"
        assert entry.findtext("a:author/a:name", namespaces=NS) == "Grace"
        assert [c.get("term") for c in entry.findall("a:category", NS)] == ["python", "seo"]
        assert entry.findtext("a:summary", namespaces=NS) == "Short."

    def test_summary_from_body_truncated(self) -> None:
        body = " ".join(f"word{i}" for i in range(SUMMARY_WORDS + 10))
        entry = _parse(build_feed([_post("2024-03-01-b.md", body)], SITE, FeedConfig())).find(
            "a:entry", NS
        )
        assert entry is not None
        summary = entry.findtext("a:summary", namespaces=NS) or ""
        assert summary.endswith("...")
        assert len(summary.removesuffix("...").split()) == SUMMARY_WORDS

    def test_summary_strips_markup(self) -> None:
        entry = _parse(build_feed([_post("2024-03-01-b.md", "Some **bold** text.")], SITE, FeedConfig())).find(
            "a:entry", NS
        )
        assert entry is not None
        assert entry.findtext("a:summary", namespaces=NS) == "Some bold text."

    def test_empty_feed_still_valid(self) -> None:
        root = _parse(build_feed([], SITE, FeedConfig()))
        assert root.findall("a:entry", NS) == []
        assert root.findtext("a:updated", namespaces=NS)


class TestFeedPlugin:
    def test_written_by_build(self, site_root: Path) -> None:
        write_post(site_root, "2020-01-01-older.md", title="Older", description="Old news.")
        site = make_site(site_root)
        build_site(site)
        root = _parse((site.output_root / "feed.xml").read_bytes())
        titles = [e.findtext("a:title", namespaces=NS) for e in root.findall("a:entry", NS)]
        assert titles == ["Welcome to Test Blog", "Older"]

    def test_custom_path(self, site_root: Path) -> None:
        site = make_site(site_root, feed={"path": "atom/index.xml"})
        data = build_site(site)
        assert data["plugins"]["feed"] == ["atom/index.xml"]
        assert (site.output_root / "atom" / "index.xml").is_file()
