"""Utility-class stylesheet engine.

Scans markup for the utility classes it references and emits only the
rules for those classes. Depends on stdlib only; file discovery and
writing are orchestrated by :mod:`folio.services.css`.
"""

from folio.css.generator import Stylesheet, Theme, generate_stylesheet
from folio.css.scanner import collect_classes, expand_content_globs, extract_classes

__all__ = [
    "Stylesheet",
    "Theme",
    "collect_classes",
    "expand_content_globs",
    "extract_classes",
    "generate_stylesheet",
]
