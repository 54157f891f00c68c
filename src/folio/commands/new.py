"""Command group: content creation (post, page)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.commands._base import FolioGroup
from folio.services.create import CreateService

if TYPE_CHECKING:
    from folio.commands._context import AppContext


_NEW_EXAMPLES = """\
  folio new post "Hello World"
  folio new post "Shipping folio 1.0" --tags release,python --date 2024-05-01
  folio new post "Half an idea" --draft
  folio new page "Talks" --permalink /speaking/"""


@click.group(cls=FolioGroup, examples=_NEW_EXAMPLES)
def new() -> None:
    """Create posts and pages."""


@new.command(
    examples="""\
  folio new post "Hello World"
  folio new post "Release notes" --tags release --description "What changed in 1.0"
  folio new post "Later" --draft"""
)
@click.argument("title")
@click.option("--tags", default=None, help="Comma-separated tags.")
@click.option("--date", "date_", default=None, help="Publish date, YYYY-MM-DD (default: today).")
@click.option("--layout", default=None, help="Layout name (default: [build] post_layout).")
@click.option("--description", default=None, help="Meta description.")
@click.option("--draft", is_flag=True, help="Write to the drafts directory.")
@click.pass_obj
def post(
    app: AppContext,
    title: str,
    tags: str | None,
    date_: str | None,
    layout: str | None,
    description: str | None,
    draft: bool,
) -> None:
    """Create a new blog post."""
    app.emit(
        CreateService(app.site).create_post(
            title,
            tags=tags,
            date=date_,
            layout=layout,
            description=description,
            draft=draft,
        )
    )


@new.command(
    examples="""\
  folio new page "Talks"
  folio new page "Now" --permalink /now/ --layout page"""
)
@click.argument("title")
@click.option("--permalink", default=None, help="Output URL (default: /<slug>.html).")
@click.option("--layout", default=None, help="Layout name (default: [build] page_layout).")
@click.option("--description", default=None, help="Meta description.")
@click.pass_obj
def page(
    app: AppContext,
    title: str,
    permalink: str | None,
    layout: str | None,
    description: str | None,
) -> None:
    """Create a new standalone page."""
    app.emit(
        CreateService(app.site).create_page(
            title, permalink=permalink, layout=layout, description=description
        )
    )
