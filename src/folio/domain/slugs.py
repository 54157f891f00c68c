"""Slug, title, and date helpers for content filenames.

Post filenames follow ``YYYY-MM-DD-slug.ext``. The date prefix is the
fallback publication date; front matter may override it.
"""

from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime
from typing import Any

POST_FILENAME_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)\.(?P<ext>md|markdown|html)$"
)

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Normalize *text* into a URL-safe slug.

    Examples:
        >>> slugify("Fixing SEO: page.title vs site.title")
        'fixing-seo-page-title-vs-site-title'
        >>> slugify("Café Déjà Vu")
        'cafe-deja-vu'
        >>> slugify("???")
        'untitled'
    """
    folded = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", folded.lower()).strip("-")
    return slug or "untitled"


def title_from_slug(slug: str) -> str:
    """Turn ``my-first-post`` into ``My First Post``."""
    words = [w for w in re.split(r"[-_]+", slug) if w]
    return " ".join(w[:1].upper() + w[1:] for w in words)


def parse_post_filename(name: str) -> tuple[date, str]:
    """Split a post filename into ``(date, slug)``.

    Raises:
        ValueError: If *name* does not match ``YYYY-MM-DD-slug.ext`` or the
            date prefix is not a real calendar date.
    """
    match = POST_FILENAME_RE.match(name)
    if match is None:
        msg = f"Post filename must look like YYYY-MM-DD-slug.md: {name!r}"
        raise ValueError(msg)
    published = date(int(match["year"]), int(match["month"]), int(match["day"]))
    return published, match["slug"]


def coerce_date(value: Any) -> date | None:
    """Coerce a front-matter date value into a :class:`date`.

    Accepts ``date``, ``datetime`` (the date part is used), and ISO 8601
    strings with or without a time component. ``None`` and empty strings
    return None.

    Raises:
        ValueError: If *value* cannot be interpreted as a date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            msg = f"Unrecognized date: {value!r}"
            raise ValueError(msg) from None
    msg = f"Unrecognized date: {value!r}"
    raise ValueError(msg)
