"""Built-in sitemap plugin.

Writes ``sitemap.xml`` (sitemaps.org 0.9) listing every published page
and post whose front matter does not set ``sitemap: false``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from folio.domain.permalinks import absolute_url
from folio.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from folio.config.models import SiteConfig
    from folio.domain.content import Document
    from folio.infrastructure.site import Site, SiteContent

SITEMAP_FILENAME = "sitemap.xml"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def build_sitemap(documents: Iterable[Document], site: SiteConfig) -> bytes:
    """Render the sitemap XML for *documents*."""
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for doc in documents:
        if not doc.published or not doc.sitemap:
            continue
        entry = ET.SubElement(urlset, "url")
        ET.SubElement(entry, "loc").text = absolute_url(
            doc.url, origin=site.url, baseurl=site.baseurl
        )
        if doc.kind == "post" and doc.date is not None:
            ET.SubElement(entry, "lastmod").text = doc.date.isoformat()
    ET.indent(urlset)
    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True) + b"\n"


def read_sitemap_locations(path: Path) -> set[str]:
    """Return every ``<loc>`` in an existing sitemap file.

    Raises:
        xml.etree.ElementTree.ParseError: The file is not well-formed XML.
    """
    tree = ET.parse(path)
    return {
        (loc.text or "").strip()
        for loc in tree.getroot().iter(f"{{{SITEMAP_NS}}}loc")
    }


class SitemapPlugin:
    """Write ``sitemap.xml`` after every build."""

    @hookimpl
    def post_build(self, site: Site, content: SiteContent, output_dir: Path) -> list[str]:
        documents = [*content.pages, *content.posts]
        xml = build_sitemap(documents, site.settings.site)
        (output_dir / SITEMAP_FILENAME).write_bytes(xml)
        return [SITEMAP_FILENAME]
