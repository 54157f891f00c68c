"""Click base classes with ``--examples`` support.

``--help`` stays short; ``--examples`` prints worked invocations and exits.
Commands that carry examples say so in their help epilog.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from folio.commands._context import AppContext


class _ExamplesMixin:
    """Adds an eager ``--examples`` flag when *examples* text is given."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

        self.params.append(  # type: ignore[attr-defined]
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=show_examples,
                help="Show usage examples.",
            )
        )

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(f"Run '{ctx.command_path} --examples' for usage examples.")


class FolioCommand(_ExamplesMixin, click.Command):
    """Click Command that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class FolioGroup(_ExamplesMixin, click.Group):
    """Click Group that supports an ``--examples`` flag.

    Sets ``command_class = FolioCommand`` so subcommands accept
    ``examples=`` without an explicit ``cls=``.
    """

    command_class = FolioCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


def is_interactive(app: AppContext) -> bool:
    """True when prompts may fire: human output and a TTY on stdin."""
    return not app.settings.json_output and not app.settings.quiet and sys.stdin.isatty()
