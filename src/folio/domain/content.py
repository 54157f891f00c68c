"""Content models: front matter, documents, and validation.

A :class:`Document` is one renderable source file. Its attributes are
derived from the front matter plus path conventions:

- Posts live in ``_posts/YYYY-MM-DD-slug.md``; the filename supplies the
  fallback date and slug, the permalink pattern supplies the URL.
- Pages are any other ``.html``/``.md`` file with a front-matter block;
  their URL follows the file path unless ``permalink`` overrides it.

Pure parsing utilities (``parse_frontmatter``, ``order_frontmatter``,
``render_frontmatter``) live here so that the dependency direction stays
clean: infrastructure -> domain, never the reverse.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from io import StringIO
from pathlib import PurePosixPath
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, Field
from ruamel.yaml import YAML

from folio.domain.frontmatter import PageFrontmatter, PostFrontmatter
from folio.domain.permalinks import (
    expand_permalink,
    normalize_url,
    page_url,
    url_to_output_path,
)
from folio.domain.slugs import parse_post_filename, slugify

# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves comments and quote styles)
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful, and a failed dump can leave a
    shared instance in a broken state.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


CANONICAL_KEY_ORDER: list[str] = [
    "layout",
    "title",
    "date",
    "author",
    "description",
    "tags",
    "categories",
    "permalink",
    "canonical_url",
    "published",
    "sitemap",
]

_FRONTMATTER_DELIMITER = "---"

MARKDOWN_EXTENSIONS = frozenset({".md", ".markdown"})


# ---------------------------------------------------------------------------
# Validation result
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ValidationResult:
    """Result of a content validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Pure parsing / rendering utilities
# ---------------------------------------------------------------------------


def has_frontmatter(content: str) -> bool:
    """Return True when *content* opens with a closed ``---`` block."""
    lines = content.replace("\r\n", "\n").split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return False
    return any(line.strip() == _FRONTMATTER_DELIMITER for line in lines[1:])


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front matter and body from a content file.

    Expects the file to start with ``---`` on the first line. The second
    ``---`` closes the YAML block. Everything after is the body.

    Handles both ``\\n`` and ``\\r\\n`` line endings.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no valid
        front-matter delimiters are found, returns ``({}, content)``.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return {}, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])

    if body.startswith("\n"):
        body = body[1:]

    loaded = _new_yaml().load(yaml_block) or {}
    if not isinstance(loaded, Mapping):
        msg = "Front matter must be a YAML mapping"
        raise ValueError(msg)
    return dict(loaded), body


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    Keys present in :data:`CANONICAL_KEY_ORDER` come first (in that
    order), followed by any remaining keys sorted alphabetically.
    ``None`` values are omitted.
    """
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm and fm[key] is not None:
            ordered[key] = fm[key]

    for key in sorted(fm.keys()):
        if key not in ordered and fm[key] is not None:
            ordered[key] = fm[key]

    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a front-matter dict and body text into a content file."""
    ordered = order_frontmatter(frontmatter)
    buf = StringIO()
    _new_yaml().dump(ordered, buf)
    yaml_text = buf.getvalue()
    return f"{_FRONTMATTER_DELIMITER}\n{yaml_text}{_FRONTMATTER_DELIMITER}\n\n{body}"


def to_plain(value: Any) -> Any:
    """Convert ruamel containers and scalars into plain Python values."""
    if isinstance(value, Mapping):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if value is None or isinstance(value, (bool, date)):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    return str(value)


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------


class Document(BaseModel):
    """A renderable source file: a post or a page.

    Attributes mirror what templates see as ``page.*``. Unknown front-matter
    keys stay available through :attr:`frontmatter`.
    """

    model_config = {"frozen": True}

    source: str
    kind: Literal["post", "page"]
    slug: str
    url: str
    title: str | None = None
    date: dt.date | None = None
    layout: str | None = None
    author: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    canonical_url: str | None = None
    published: bool = True
    sitemap: bool = True
    draft: bool = False
    render_template: bool = True
    body: str = ""
    frontmatter: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_markdown(self) -> bool:
        return PurePosixPath(self.source).suffix in MARKDOWN_EXTENSIONS

    @property
    def output_path(self) -> PurePosixPath:
        """Output file path relative to the site's output directory."""
        return url_to_output_path(self.url)

    def to_context(self) -> dict[str, Any]:
        """Return the mapping exposed to templates as ``page``."""
        context: dict[str, Any] = dict(self.frontmatter)
        context.update(
            {
                "source": self.source,
                "kind": self.kind,
                "slug": self.slug,
                "url": self.url,
                "title": self.title,
                "date": self.date,
                "layout": self.layout,
                "author": self.author,
                "description": self.description,
                "tags": list(self.tags),
                "categories": list(self.categories),
                "canonical_url": self.canonical_url,
                "published": self.published,
                "draft": self.draft,
            }
        )
        return context

    def with_frontmatter(self, **changes: Any) -> dict[str, Any]:
        """Return this document's raw front matter with *changes* applied."""
        fm = dict(self.frontmatter)
        fm.update(changes)
        return fm


class Post(Document):
    """A dated blog post from the posts (or drafts) directory."""

    @classmethod
    def from_source(
        cls,
        source: str,
        frontmatter: dict[str, Any],
        body: str,
        *,
        permalink: str,
        fallback_date: date | None = None,
        draft: bool = False,
    ) -> Post:
        """Build a post from its site-relative *source* path and parsed content.

        For regular posts the filename supplies the default date and slug.
        Drafts have no date prefix; *fallback_date* is used instead.

        Raises:
            ValueError: Bad filename, unparsable date, or invalid permalink.
            pydantic.ValidationError: Front matter fails schema validation.
        """
        fm = PostFrontmatter.model_validate(to_plain(frontmatter))
        name = PurePosixPath(source).name
        if draft:
            file_date, slug = fallback_date, slugify(PurePosixPath(source).stem)
        else:
            file_date, slug = parse_post_filename(name)

        published_on = fm.date or file_date
        if fm.permalink:
            url = normalize_url(fm.permalink)
        else:
            url = expand_permalink(
                permalink,
                date=published_on,
                slug=slug,
                title=fm.title,
                categories=fm.categories,
            )

        return cls(
            source=source,
            kind="post",
            slug=slug,
            url=url,
            title=fm.title,
            date=published_on,
            layout=fm.layout,
            author=fm.author,
            description=fm.description,
            tags=fm.tags,
            categories=fm.categories,
            canonical_url=fm.canonical_url,
            published=fm.published,
            sitemap=fm.sitemap,
            draft=draft,
            render_template=bool(fm.render_template),
            body=body,
            frontmatter=to_plain(frontmatter),
        )


class Page(Document):
    """A standalone page (home, blog index, contacts, tools, ...)."""

    @classmethod
    def from_source(cls, source: str, frontmatter: dict[str, Any], body: str) -> Page:
        """Build a page from its site-relative *source* path and parsed content."""
        fm = PageFrontmatter.model_validate(to_plain(frontmatter))
        url = normalize_url(fm.permalink) if fm.permalink else page_url(source)
        stem = PurePosixPath(source).stem
        slug = slugify(PurePosixPath(source).parent.name if stem == "index" else stem)
        if url == "/":
            slug = "index"
        return cls(
            source=source,
            kind="page",
            slug=slug,
            url=url,
            title=fm.title,
            date=fm.date,
            layout=fm.layout,
            author=fm.author,
            description=fm.description,
            tags=fm.tags,
            categories=fm.categories,
            canonical_url=fm.canonical_url,
            published=fm.published,
            sitemap=fm.sitemap,
            render_template=fm.render_template is not False,
            body=body,
            frontmatter=to_plain(frontmatter),
        )


# ---------------------------------------------------------------------------
# Ordering and validation
# ---------------------------------------------------------------------------


D = TypeVar("D", bound="Document")


def sort_posts(posts: Iterable[D]) -> list[D]:
    """Order posts newest first; posts sharing a date sort by slug."""
    by_slug = sorted(posts, key=lambda p: p.slug)
    return sorted(by_slug, key=lambda p: p.date or date.min, reverse=True)


def validate_document(doc: Document, *, known_layouts: Iterable[str]) -> ValidationResult:
    """Check the authoring invariants every document must satisfy.

    A document without a layout renders without the shared head markup,
    so it ships with no ``<title>``. That is an error, not a warning.
    """
    errors: list[str] = []
    warnings: list[str] = []
    layouts = set(known_layouts)

    if not doc.title:
        errors.append("Missing 'title' in front matter")
    if not doc.layout:
        errors.append("Missing 'layout' in front matter; page renders without <head>")
    elif doc.layout not in layouts:
        errors.append(f"Unknown layout {doc.layout!r}")
    if doc.kind == "post" and not doc.description:
        warnings.append("Missing 'description'; search snippets fall back to the excerpt")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
