"""Front-matter schema models for posts and pages.

Canonical key ordering:
  layout, title, date, author, description, tags, categories,
  permalink, canonical_url, published, sitemap

Unknown keys are allowed and passed through to templates untouched.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from folio.domain.slugs import coerce_date
from folio.domain.tags import normalize_tags


class BaseFrontmatter(BaseModel):
    """Common front-matter fields shared by posts and pages."""

    model_config = {"frozen": True, "extra": "allow"}

    layout: str | None = None
    title: str | None = None
    date: Any = None
    author: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    permalink: str | None = None
    canonical_url: str | None = None
    published: bool = True
    sitemap: bool = True
    render_template: bool | None = None

    @field_validator("tags", "categories", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        return coerce_date(value)

    @field_validator("layout", "title", "author", "description", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None:
            return None
        return str(value)


class PostFrontmatter(BaseFrontmatter):
    """Front matter for a dated blog post."""


class PageFrontmatter(BaseFrontmatter):
    """Front matter for a standalone page (home, contacts, tools, ...)."""

    model_config = {"frozen": True, "extra": "allow"}

    nav_order: int | None = None
