"""Command: regenerate the utility stylesheet."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.commands._base import FolioCommand

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.command(
    cls=FolioCommand,
    examples="""\
  folio css
  folio css --minify
  folio -v css""",
)
@click.option("--minify/--no-minify", default=None, help="Override [css] minify.")
@click.pass_obj
def css(app: AppContext, minify: bool | None) -> None:
    """Scan markup for utility classes and write only the rules in use."""
    if minify is not None:
        css_cfg = app.settings.css.model_copy(update={"minify": minify})
        app.settings = app.settings.model_copy(update={"css": css_cfg})

    from folio.services.css import CssService

    app.emit(CssService(app.site).build_css())
