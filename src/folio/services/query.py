"""QueryService: read-only listings over site content."""

from __future__ import annotations

from typing import Any

from folio.domain.content import Post, sort_posts
from folio.services.base import BaseService
from folio.services.result import ErrorCode, ServiceResult
from folio.services.telemetry import traced


def _post_row(post: Post, *, visible: bool) -> dict[str, Any]:
    return {
        "title": post.title,
        "date": post.date.isoformat() if post.date else None,
        "url": post.url,
        "tags": post.tags,
        "source": post.source,
        "draft": post.draft,
        "published": post.published,
        "visible": visible,
    }


class QueryService(BaseService):
    """Lists posts the way the blog index orders them."""

    @traced
    def list_posts(
        self,
        *,
        tag: str | None = None,
        limit: int | None = None,
        include_unpublished: bool = False,
    ) -> ServiceResult:
        """List posts by descending date.

        Args:
            tag: Only posts carrying this tag.
            limit: At most this many rows.
            include_unpublished: Also list drafts, ``published: false`` and
                future-dated posts.
        """
        op = "list_posts"
        if limit is not None and limit < 1:
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "limit must be positive")
        if not self._site.exists():
            return ServiceResult.failure(
                op, ErrorCode.NO_SITE, f"No folio site found at {self._site.root}"
            )

        content = self._site.load(drafts=include_unpublished)
        visible = {p.source for p in content.posts}
        posts = list(content.posts)
        if include_unpublished:
            posts = sort_posts([*posts, *content.hidden])
        if tag:
            posts = [p for p in posts if tag in p.tags]
        total = len(posts)
        if limit is not None:
            posts = posts[:limit]

        items = [_post_row(p, visible=p.source in visible) for p in posts]
        return ServiceResult(
            ok=True,
            op=op,
            data={"items": items, "count": len(items), "total": total},
            warnings=content.warnings,
        )
