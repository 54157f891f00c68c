"""Command: site checks and safe repairs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from folio.commands._base import FolioCommand

if TYPE_CHECKING:
    from folio.commands._context import AppContext


@click.command(
    cls=FolioCommand,
    examples="""\
  folio check
  folio check --errors-only
  folio check --min-severity error
  folio check --fix
  folio --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--fix", is_flag=True, help="Add missing layouts and post titles.")
@click.option("--strict", is_flag=True, help="Exit 1 when any error is reported.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool, fix: bool, strict: bool) -> None:
    """Check front matter, SEO metadata, and built output."""
    from folio.services.check import CheckService

    svc = CheckService(app.site)
    if fix:
        app.emit(svc.fix())
        return

    threshold = "error" if errors_only else min_severity
    result = svc.check(min_severity=threshold)
    app.emit(result)
    if strict and result.ok and result.data["error_count"]:
        raise SystemExit(1)
