"""Collect utility class names from markup and Markdown sources.

Class names are taken from ``class="..."`` / ``class='...'`` attributes and
from Markdown attribute lists written as ``{: .foo .bar }``. Template
expressions inside attribute values (``{{ ... }}`` and ``{% ... %}``) are
dropped, but literal classes between template tags are kept, so
``class="px-4 {% if active %}font-bold{% endif %}"`` yields both.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

_CLASS_ATTR_RE = re.compile(r"""(?<![\w:-])class\s*=\s*(?:"([^"]*)"|'([^']*)')""", re.IGNORECASE)
_ATTR_LIST_RE = re.compile(r"\{:\s*([^}]*)\}")
_TEMPLATE_FRAGMENT_RE = re.compile(r"\{\{.*?\}\}|\{%.*?%\}|\{#.*?#\}", re.DOTALL)
_VALID_CLASS_RE = re.compile(r"^-?[A-Za-z0-9_:\-/\[\]\(\)\.,%#!]+$")

_SKIP_PARTS = frozenset({"node_modules", ".git"})


def expand_content_globs(root: Path, patterns: Iterable[str]) -> list[Path]:
    """Expand *patterns* relative to *root* into a sorted list of files.

    Patterns use :meth:`pathlib.Path.glob` syntax (``**`` recurses).
    ``./`` prefixes are tolerated for parity with JavaScript build configs.
    """
    found: set[Path] = set()
    for pattern in patterns:
        cleaned = pattern.removeprefix("./")
        for path in root.glob(cleaned):
            if not path.is_file():
                continue
            if any(part in _SKIP_PARTS for part in path.relative_to(root).parts):
                continue
            found.add(path)
    return sorted(found)


def _tokens(value: str) -> list[str]:
    stripped = _TEMPLATE_FRAGMENT_RE.sub(" ", value)
    return [tok for tok in stripped.split() if _VALID_CLASS_RE.match(tok)]


def extract_classes(text: str) -> set[str]:
    """Return the set of class names referenced in *text*."""
    classes: set[str] = set()
    for match in _CLASS_ATTR_RE.finditer(text):
        value = match.group(1) if match.group(1) is not None else match.group(2)
        classes.update(_tokens(value))

    for match in _ATTR_LIST_RE.finditer(text):
        for part in match.group(1).split():
            if part.startswith(".") and len(part) > 1:
                name = part[1:]
                if _VALID_CLASS_RE.match(name):
                    classes.add(name)
    return classes


def collect_classes(files: Iterable[Path]) -> list[str]:
    """Read every file in *files* and return the sorted union of their classes.

    Undecodable files are skipped.
    """
    classes: set[str] = set()
    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            continue
        classes.update(extract_classes(text))
    return sorted(classes)
