"""Subcommand modules for folio.

Provides register_commands() which uses deferred imports to keep
``folio --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``new`` group and the standalone commands on the root CLI group."""
    # --- Groups ---
    from folio.commands.new import new

    cli.add_command(new)

    # --- Standalone commands ---
    from folio.commands.build import build
    from folio.commands.check import check
    from folio.commands.css import css
    from folio.commands.init_cmd import init_cmd
    from folio.commands.list_cmd import list_cmd

    cli.add_command(init_cmd)
    cli.add_command(build)
    cli.add_command(css)
    cli.add_command(check)
    cli.add_command(list_cmd)
