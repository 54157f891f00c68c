"""Built-in robots.txt plugin."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from folio.domain.permalinks import absolute_url
from folio.plugins.builtins.sitemap import SITEMAP_FILENAME
from folio.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from folio.config.models import RobotsConfig, SiteConfig
    from folio.infrastructure.site import Site, SiteContent

ROBOTS_FILENAME = "robots.txt"


def build_robots(robots: RobotsConfig, site: SiteConfig, *, sitemap: bool) -> str:
    """Render ``robots.txt``.

    An empty ``Disallow:`` line allows everything.
    """
    lines = ["User-agent: *"]
    if robots.disallow:
        lines.extend(f"Disallow: {path}" for path in robots.disallow)
    else:
        lines.append("Disallow:")
    if sitemap:
        loc = absolute_url(SITEMAP_FILENAME, origin=site.url, baseurl=site.baseurl)
        lines.extend(["", f"Sitemap: {loc}"])
    return "\n".join(lines) + "\n"


class RobotsPlugin:
    """Write ``robots.txt`` pointing crawlers at the sitemap."""

    @hookimpl
    def post_build(self, site: Site, content: SiteContent, output_dir: Path) -> list[str]:
        text = build_robots(
            site.settings.robots,
            site.settings.site,
            sitemap=site.plugin_manager.has_plugin("sitemap"),
        )
        (output_dir / ROBOTS_FILENAME).write_text(text, encoding="utf-8")
        return [ROBOTS_FILENAME]
