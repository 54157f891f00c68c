"""Built-in Atom feed plugin.

Writes an Atom 1.0 feed of the newest ``[feed] limit`` posts to
``[feed] path`` (default ``feed.xml``).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import UTC, datetime, time
from pathlib import Path
from typing import TYPE_CHECKING

from folio.domain.permalinks import absolute_url
from folio.infrastructure.markdown import render_markdown, strip_html
from folio.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from datetime import date

    from folio.config.models import FeedConfig, SiteConfig
    from folio.domain.content import Post
    from folio.infrastructure.site import Site, SiteContent

ATOM_NS = "http://www.w3.org/2005/Atom"
SUMMARY_WORDS = 50


def _timestamp(value: date | None) -> str:
    if value is None:
        return datetime.now(UTC).isoformat(timespec="seconds")
    return datetime.combine(value, time.min, tzinfo=UTC).isoformat()


def _summary(post: Post) -> str:
    if post.description:
        return post.description
    words = strip_html(render_markdown(post.body)).split()
    text = " ".join(words[:SUMMARY_WORDS])
    return text + "..." if len(words) > SUMMARY_WORDS else text


def build_feed(posts: Sequence[Post], site: SiteConfig, feed: FeedConfig) -> bytes:
    """Render the Atom feed for *posts* (already newest first)."""
    entries = list(posts)[: feed.limit]

    def _abs(url: str) -> str:
        return absolute_url(url, origin=site.url, baseurl=site.baseurl)

    root = ET.Element("feed", xmlns=ATOM_NS)
    ET.SubElement(root, "title").text = site.title
    if site.description:
        ET.SubElement(root, "subtitle").text = site.description
    ET.SubElement(root, "link", href=_abs(feed.path), rel="self")
    ET.SubElement(root, "link", href=_abs("/"))
    ET.SubElement(root, "id").text = _abs("/")
    ET.SubElement(root, "updated").text = _timestamp(entries[0].date if entries else None)
    if site.author:
        ET.SubElement(ET.SubElement(root, "author"), "name").text = site.author

    for post in entries:
        entry = ET.SubElement(root, "entry")
        ET.SubElement(entry, "title").text = post.title or post.slug
        ET.SubElement(entry, "link", href=_abs(post.url))
        ET.SubElement(entry, "id").text = _abs(post.url)
        ET.SubElement(entry, "updated").text = _timestamp(post.date)
        if post.author:
            ET.SubElement(ET.SubElement(entry, "author"), "name").text = post.author
        for tag in post.tags:
            ET.SubElement(entry, "category", term=tag)
        ET.SubElement(entry, "summary").text = _summary(post)

    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True) + b"\n"


class FeedPlugin:
    """Write the Atom feed after every build."""

    @hookimpl
    def post_build(self, site: Site, content: SiteContent, output_dir: Path) -> list[str]:
        feed = site.settings.feed
        dest = output_dir / feed.path.lstrip("/")
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(build_feed(content.posts, site.settings.site, feed))
        return [feed.path.lstrip("/")]
