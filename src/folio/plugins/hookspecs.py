"""Pluggy hook specifications for folio build events.

Hooks run synchronously inside the build. A hook that raises is reported
as a build warning and the build continues.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from folio.domain.content import Document
    from folio.infrastructure.site import Site, SiteContent

hookspec = pluggy.HookspecMarker("folio")
hookimpl = pluggy.HookimplMarker("folio")


class FolioHookSpec:
    """Hook specifications for the folio plugin system."""

    @hookspec
    def register_filters(self) -> dict[str, Any] | None:
        """Return extra Jinja2 filters, keyed by filter name."""

    @hookspec
    def post_render(self, site: Site, document: Document, html: str) -> str | None:
        """Called after a document is rendered; may return replacement HTML."""

    @hookspec
    def post_build(self, site: Site, content: SiteContent, output_dir: Path) -> list[str] | None:
        """Called after all pages are written.

        Returns the files the plugin wrote, relative to *output_dir*.
        """
