"""Permalink expansion and URL-to-file mapping.

A URL ending in ``/`` is written as ``index.html`` inside that directory.
A URL with a file extension is written as-is. Anything else is treated
as a directory.
"""

from __future__ import annotations

import posixpath
import re
from datetime import date
from pathlib import PurePosixPath
from urllib.parse import urlsplit

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")
_MULTI_SLASH_RE = re.compile(r"/{2,}")

PAGE_EXTENSIONS = (".html", ".htm", ".md", ".markdown")


def expand_permalink(
    pattern: str,
    *,
    date: date | None,
    slug: str,
    title: str | None = None,
    categories: list[str] | None = None,
) -> str:
    """Expand a permalink pattern such as ``/blog/{year}/{slug}/``.

    Supported placeholders: ``{year}``, ``{month}``, ``{day}``, ``{slug}``,
    ``{title}`` (alias of slug), and ``{categories}`` (joined with ``/``).

    Raises:
        ValueError: If the pattern uses an unknown placeholder, or a date
            placeholder without a date.
    """
    values: dict[str, str] = {
        "slug": slug,
        "title": slug,
        "categories": "/".join(categories or []),
    }
    if date is not None:
        values["year"] = f"{date.year:04d}"
        values["month"] = f"{date.month:02d}"
        values["day"] = f"{date.day:02d}"

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in values:
            msg = f"Cannot expand {{{key}}} in permalink {pattern!r}"
            raise ValueError(msg)
        return values[key]

    url = _PLACEHOLDER_RE.sub(_replace, pattern)
    return normalize_url(url)


def normalize_url(url: str) -> str:
    """Ensure a leading slash and collapse repeated slashes."""
    url = "/" + url.lstrip("/")
    return _MULTI_SLASH_RE.sub("/", url)


def url_to_output_path(url: str) -> PurePosixPath:
    """Map a site URL to its file path relative to the output directory.

    Examples:
        >>> str(url_to_output_path("/"))
        'index.html'
        >>> str(url_to_output_path("/blog/hello/"))
        'blog/hello/index.html'
        >>> str(url_to_output_path("/about.html"))
        'about.html'
        >>> str(url_to_output_path("/feed"))
        'feed/index.html'
    """
    path = normalize_url(url)
    if path.endswith("/"):
        return PurePosixPath(path.strip("/")) / "index.html"
    if posixpath.splitext(path)[1]:
        return PurePosixPath(path.lstrip("/"))
    return PurePosixPath(path.strip("/")) / "index.html"


def page_url(relative_source: str) -> str:
    """Derive the URL of a standalone page from its site-relative path.

    ``index.html`` maps to ``/``, ``docs/index.md`` to ``/docs/``, and any
    other page keeps its name with an ``.html`` extension.
    """
    source = PurePosixPath(relative_source)
    if source.suffix not in PAGE_EXTENSIONS:
        msg = f"Not a page source: {relative_source!r}"
        raise ValueError(msg)
    if source.stem == "index":
        parent = source.parent.as_posix()
        return "/" if parent == "." else normalize_url(f"{parent}/")
    return normalize_url(source.with_suffix(".html").as_posix())


def site_relative_url(url: str, baseurl: str = "") -> str:
    """Prefix *url* with the site's *baseurl*; absolute URLs pass through."""
    if urlsplit(url).scheme:
        return url
    base = baseurl.strip("/")
    prefix = f"/{base}" if base else ""
    return prefix + "/" + url.lstrip("/")


def absolute_url(url: str, *, origin: str, baseurl: str = "") -> str:
    """Join *origin* (``https://example.com``), *baseurl* and *url*."""
    if urlsplit(url).scheme:
        return url
    return origin.rstrip("/") + site_relative_url(url, baseurl)
