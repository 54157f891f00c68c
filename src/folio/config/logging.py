"""structlog configuration for folio.

All records, stdlib and structlog alike, go to stderr through one
``ProcessorFormatter`` so stdout stays reserved for command output:

- Human (default): console renderer, colored when stderr is a TTY.
- JSON (``--log-json``): one JSON object per line.

Build code binds the site root and current source file with
:func:`log_context`; every record emitted inside the block carries them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

# Third-party loggers that are chatty at DEBUG.
QUIET_LOGGERS: tuple[str, ...] = ("MARKDOWN", "ruamel", "pluggy")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set logger levels.

    Args:
        verbose: ``folio.*`` loggers emit DEBUG; otherwise WARNING and up.
        log_json: Render JSON lines instead of console text.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("folio").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def log_context(**values: Any) -> Iterator[None]:
    """Bind *values* to every log record emitted inside the block."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
