"""Command: site initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from folio.commands._base import FolioCommand, is_interactive
from folio.domain.slugs import title_from_slug

if TYPE_CHECKING:
    from folio.commands._context import AppContext

_INIT_EXAMPLES = """\
  folio init
  folio init my-blog --title "Jane's Notes" --url https://jane.dev
  folio init . --title Portfolio --author "Jane Doe"
  folio --json init /tmp/site --title Test"""


@click.command("init", cls=FolioCommand, examples=_INIT_EXAMPLES)
@click.argument("path", required=False, default=".")
@click.option("--title", default=None, help="Site title.")
@click.option("--url", default=None, help="Production origin, e.g. https://example.com.")
@click.option("--author", default=None, help="Default post author.")
@click.pass_obj
def init_cmd(
    app: AppContext,
    path: str,
    title: str | None,
    url: str | None,
    author: str | None,
) -> None:
    """Scaffold a new site: config, layouts, pages, and a first post."""
    site_path = Path(path).resolve()
    interactive = is_interactive(app)
    default_title = title_from_slug(site_path.name) or "My Blog"

    if title is None:
        title = click.prompt("Site title", default=default_title) if interactive else default_title
    if url is None:
        url = (
            click.prompt("Site URL", default="http://localhost:4000")
            if interactive
            else "http://localhost:4000"
        )
    if author is None:
        author = click.prompt("Author", default="") if interactive else ""

    from folio.services.init import InitService

    app.emit(InitService.init_site(site_path, title=title, url=url, author=author))
