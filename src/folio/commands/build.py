"""Command: render the site into the output directory."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.commands._base import FolioCommand

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.command(
    cls=FolioCommand,
    examples="""\
  folio build
  folio build --drafts
  folio build --no-clean
  folio -v build
  folio --json build""",
)
@click.option(
    "--drafts/--no-drafts",
    default=None,
    help="Include posts from the drafts directory (default: [build] drafts).",
)
@click.option(
    "--clean/--no-clean",
    default=None,
    help="Empty the output directory first (default: [build] clean).",
)
@click.pass_obj
def build(app: AppContext, drafts: bool | None, clean: bool | None) -> None:
    """Build the site: pages, posts, stylesheet, sitemap, robots.txt, feed."""
    from folio.services.build import BuildService

    app.emit(BuildService(app.site).build(drafts=drafts, clean=clean))
