"""Command: list posts newest first."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.commands._base import FolioCommand

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.command(
    "list",
    cls=FolioCommand,
    examples="""\
  folio list
  folio list --tag python --limit 5
  folio list --all
  folio -q list""",
)
@click.option("--tag", default=None, help="Only posts with this tag.")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum rows.")
@click.option(
    "--all",
    "include_unpublished",
    is_flag=True,
    help="Include drafts, unpublished and future-dated posts.",
)
@click.pass_obj
def list_cmd(app: AppContext, tag: str | None, limit: int | None, include_unpublished: bool) -> None:
    """List posts as the blog index orders them."""
    from folio.services.query import QueryService

    app.emit(
        QueryService(app.site).list_posts(
            tag=tag, limit=limit, include_unpublished=include_unpublished
        )
    )
