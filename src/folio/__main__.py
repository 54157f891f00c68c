"""Allow ``python -m folio``."""

from folio.cli import cli

cli()
