"""folio: static-site generator for a single-author blog and portfolio."""

__version__ = "0.4.0"
