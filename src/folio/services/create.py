"""CreateService: new posts and pages from packaged body templates.

Pipeline: VALIDATE → RESOLVE PATH → RENDER BODY → PERSIST → RESPOND
"""

from __future__ import annotations

from datetime import date
from typing import Any

from jinja2 import Environment

from folio.domain.content import Page, Post
from folio.domain.slugs import coerce_date, slugify
from folio.domain.tags import normalize_tags
from folio.infrastructure.templates import build_file_environment
from folio.services._helpers import today
from folio.services.base import BaseService
from folio.services.result import ErrorCode, ServiceResult
from folio.services.telemetry import traced


class CreateService(BaseService):
    """Scaffolds individual content files. Never overwrites."""

    _env: Environment | None = None

    @property
    def env(self) -> Environment:
        if self._env is None:
            self._env = build_file_environment("content")
        return self._env

    @traced
    def create_post(
        self,
        title: str,
        *,
        tags: list[str] | str | None = None,
        date: date | str | None = None,
        layout: str | None = None,
        description: str | None = None,
        draft: bool = False,
    ) -> ServiceResult:
        """Create ``_posts/YYYY-MM-DD-slug.md`` (or ``_drafts/slug.md``)."""
        op = "create_post"
        checked = self._validate(op, title, layout or self._site.settings.build.post_layout)
        if isinstance(checked, ServiceResult):
            return checked
        layout_name = checked

        try:
            published = coerce_date(date) or today()
        except ValueError as exc:
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, str(exc))

        build = self._site.settings.build
        slug = slugify(title)
        if draft:
            rel = f"{build.drafts_dir}/{slug}.md"
        else:
            rel = f"{build.posts_dir}/{published.isoformat()}-{slug}.md"
        path = self._site.root / rel
        if path.exists():
            return ServiceResult.failure(op, ErrorCode.ALREADY_EXISTS, f"{rel} already exists", path=rel)

        fm: dict[str, Any] = {
            "layout": layout_name,
            "title": title,
            "date": None if draft else published,
            "author": self._site.settings.site.author or None,
            "description": description,
            "tags": normalize_tags(tags) or None,
        }
        body = self.env.get_template("post.md.j2").render(title=title, date=published)

        with self._site.transaction() as txn:
            txn.write_content(path, fm, body)

        post = Post.from_source(
            rel,
            {k: v for k, v in fm.items() if v is not None},
            body,
            permalink=build.permalink,
            fallback_date=published,
            draft=draft,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": rel,
                "title": title,
                "slug": post.slug,
                "url": post.url,
                "date": published.isoformat(),
                "tags": post.tags,
                "draft": draft,
            },
        )

    @traced
    def create_page(
        self,
        title: str,
        *,
        permalink: str | None = None,
        layout: str | None = None,
        description: str | None = None,
    ) -> ServiceResult:
        """Create ``<slug>.html`` at the site root."""
        op = "create_page"
        checked = self._validate(op, title, layout or self._site.settings.build.page_layout)
        if isinstance(checked, ServiceResult):
            return checked

        rel = f"{slugify(title)}.html"
        path = self._site.root / rel
        if path.exists():
            return ServiceResult.failure(op, ErrorCode.ALREADY_EXISTS, f"{rel} already exists", path=rel)

        fm: dict[str, Any] = {
            "layout": checked,
            "title": title,
            "description": description,
            "permalink": permalink,
        }
        body = self.env.get_template("page.html.j2").render(title=title)

        with self._site.transaction() as txn:
            txn.write_content(path, fm, body)

        page = Page.from_source(rel, {k: v for k, v in fm.items() if v is not None}, body)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": rel, "title": title, "slug": page.slug, "url": page.url},
        )

    def _validate(self, op: str, title: str, layout: str) -> str | ServiceResult:
        """Return the layout name, or a failed result."""
        if not title.strip():
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Title must not be empty")
        if not self._site.exists():
            return ServiceResult.failure(
                op, ErrorCode.NO_SITE, f"No folio site found at {self._site.root}"
            )
        if layout not in self._site.layouts():
            return ServiceResult.failure(
                op,
                ErrorCode.LAYOUT_NOT_FOUND,
                f"Unknown layout {layout!r}",
                available=self._site.layouts(),
            )
        return layout
