"""Markdown rendering via Python-Markdown."""

from __future__ import annotations

import re
from collections.abc import Sequence

import markdown
from bs4 import BeautifulSoup

_FIRST_PARAGRAPH_RE = re.compile(r"<p\b[^>]*>.*?</p>", re.DOTALL | re.IGNORECASE)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("fenced_code", "tables", "toc", "footnotes", "attr_list")


def render_markdown(text: str, extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> str:
    """Convert Markdown *text* to HTML.

    A fresh :class:`markdown.Markdown` instance is used per call; the
    ``toc`` and ``footnotes`` extensions keep per-document state.
    """
    md = markdown.Markdown(extensions=list(extensions), output_format="html")
    return md.convert(text)


def make_excerpt(html: str) -> str:
    """Return the first ``<p>`` element of *html*, or an empty string."""
    match = _FIRST_PARAGRAPH_RE.search(html)
    return match.group(0) if match else ""


def strip_html(html: str) -> str:
    """Plain text of *html* with whitespace collapsed."""
    text = BeautifulSoup(html, "html.parser").get_text(" ", strip=True)
    return " ".join(text.split())
