"""BuildService: render the whole site into the output directory.

Pipeline: LOAD → CHECK URLS → CLEAN → RENDER POSTS → RENDER PAGES →
LAYOUT → POST_RENDER hooks → WRITE → COPY STATIC → CSS → POST_BUILD hooks.

Every build starts from the source tree; nothing is cached between runs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from folio.config.logging import log_context
from folio.infrastructure.filesystem import clean_output, copy_static, write_output_file
from folio.infrastructure.markdown import render_markdown
from folio.infrastructure.templates import LayoutError
from folio.services.base import BaseService
from folio.services.css import CssService
from folio.services.result import ErrorCode, ServiceResult
from folio.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from collections.abc import Mapping

    from folio.domain.content import Document
    from folio.infrastructure.site import SiteContent

logger = logging.getLogger(__name__)


class _RenderFailure(Exception):
    """Internal: a document could not be rendered."""

    def __init__(self, code: ErrorCode, source: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.source = source


class BuildService(BaseService):
    """Renders posts and pages, copies assets, and runs build plugins."""

    @traced
    def build(self, *, drafts: bool | None = None, clean: bool | None = None) -> ServiceResult:
        """Build the site into ``[build] output_dir``.

        Args:
            drafts: Include ``_drafts/``; defaults to ``[build] drafts``.
            clean: Empty the output directory first; defaults to ``[build] clean``.
        """
        op = "build"
        site = self._site
        build_cfg = site.settings.build
        if not site.exists():
            return ServiceResult.failure(
                op, ErrorCode.NO_SITE, f"No folio site found at {site.root}", root=str(site.root)
            )

        output_root = site.output_root
        source_root = site.root.resolve()
        resolved_output = output_root.resolve()
        if resolved_output == source_root or source_root.is_relative_to(resolved_output):
            return ServiceResult.failure(
                op,
                ErrorCode.BUILD_FAILED,
                f"Output directory {output_root} contains the site source",
                output_dir=str(output_root),
            )

        warnings = self._plugin_warnings()
        with log_context(site=str(site.root)):
            with trace_span("load") as span:
                content = site.load(drafts=drafts)
                if span:
                    span.annotate("posts", len(content.posts))
                    span.annotate("pages", len(content.pages))
            warnings.extend(content.warnings)

            duplicates = _duplicate_urls(content.documents)
            if duplicates:
                return ServiceResult.failure(
                    op,
                    ErrorCode.BUILD_FAILED,
                    f"{len(duplicates)} URL(s) produced by more than one source",
                    warnings=warnings,
                    duplicates=duplicates,
                )

            if build_cfg.clean if clean is None else clean:
                clean_output(output_root)
            output_root.mkdir(parents=True, exist_ok=True)

            try:
                with trace_span("render"):
                    rendered = self._render_all(content, warnings)
            except _RenderFailure as exc:
                return ServiceResult.failure(
                    op, exc.code, str(exc), warnings=warnings, source=exc.source
                )

            files_written: list[str] = []
            with trace_span("write"):
                for doc in content.documents:
                    dest = write_output_file(output_root, doc.url, rendered[doc.url])
                    files_written.append(dest.relative_to(output_root).as_posix())

            with trace_span("static"):
                static = copy_static(content.static_files, site.root, output_root)
                files_written.extend(static)

            css_data: dict[str, Any] | None = None
            if site.settings.css.enabled:
                with trace_span("css"):
                    css_result = CssService(site).build_css(dest_root=output_root)
                warnings.extend(css_result.warnings)
                if not css_result.ok:
                    message = css_result.error.message if css_result.error else "CSS build failed"
                    return ServiceResult.failure(
                        op, ErrorCode.CSS_FAILED, message, warnings=warnings
                    )
                css_data = {
                    k: css_result.data[k]
                    for k in ("output", "class_count", "rule_count", "unknown_count")
                }
                if css_result.data["output"] not in files_written:
                    files_written.append(css_result.data["output"])

            plugins: dict[str, list[str]] = {}
            with trace_span("post_build"):
                for name, written in self._dispatch(
                    "post_build", warnings, site=site, content=content, output_dir=output_root
                ):
                    plugins[name] = list(written or [])
                    files_written.extend(plugins[name])

        logger.debug("Built %d files into %s", len(files_written), output_root)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output_dir": str(output_root),
                "post_count": len(content.posts),
                "page_count": len(content.pages),
                "static_count": len(static),
                "draft_count": sum(1 for p in content.posts if p.draft),
                "hidden_count": len(content.hidden),
                "files_written": sorted(set(files_written)),
                "css": css_data,
                "plugins": plugins,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_all(self, content: SiteContent, warnings: list[str]) -> dict[str, str]:
        """Render every document to final HTML, keyed by URL.

        Post bodies render first so ``site.posts`` on pages (blog index,
        home page) can show each post's content and excerpt.
        """
        site = self._site
        base_ctx = site.site_context(content)
        bodies: dict[str, str] = {}
        for post in content.posts:
            bodies[post.url] = self._render_body(post, base_ctx)

        site_ctx = site.site_context(content, bodies)
        for page in content.pages:
            bodies[page.url] = self._render_body(page, site_ctx)

        rendered: dict[str, str] = {}
        for doc in content.documents:
            html = self._apply_layout(doc, bodies[doc.url], site_ctx, warnings)
            rendered[doc.url] = self._post_render(doc, html, warnings)
        return rendered

    def _render_body(self, doc: Document, site_ctx: Mapping[str, Any]) -> str:
        """Template pass (when enabled) followed by Markdown conversion."""
        body = doc.body
        with log_context(source=doc.source):
            if doc.render_template:
                try:
                    body = self._site.renderer.render_string(
                        body, {"site": site_ctx, "page": doc.to_context()}
                    )
                except Exception as exc:
                    raise _RenderFailure(
                        ErrorCode.TEMPLATE_ERROR, doc.source, f"{doc.source}: {exc}"
                    ) from exc
            if doc.is_markdown:
                body = render_markdown(body, self._site.settings.build.markdown_extensions)
        return body

    def _apply_layout(
        self, doc: Document, body: str, site_ctx: Mapping[str, Any], warnings: list[str]
    ) -> str:
        if not doc.layout:
            message = f"{doc.source} has no layout; output has no <head>"
            logger.warning(message)
            warnings.append(message)
        page_ctx = {**doc.to_context(), "content": body}
        try:
            return self._site.renderer.apply_layouts(
                doc.layout, body, {"site": site_ctx, "page": page_ctx}
            )
        except LayoutError as exc:
            raise _RenderFailure(
                ErrorCode.LAYOUT_NOT_FOUND, doc.source, f"{doc.source}: {exc}"
            ) from exc
        except Exception as exc:
            raise _RenderFailure(
                ErrorCode.TEMPLATE_ERROR, doc.source, f"{doc.source}: {exc}"
            ) from exc

    def _post_render(self, doc: Document, html: str, warnings: list[str]) -> str:
        """Run ``post_render`` hooks in turn; a string result replaces the HTML."""
        pm = self._site.plugin_manager
        for impl in pm.hook_impls("post_render"):
            try:
                replaced = pm.invoke(impl, site=self._site, document=doc, html=html)
            except Exception as exc:
                message = f"Plugin {impl.plugin_name} failed in post_render for {doc.source}: {exc}"
                logger.warning(message)
                warnings.append(message)
                continue
            if isinstance(replaced, str):
                html = replaced
        return html


def _duplicate_urls(documents: list[Document]) -> list[dict[str, Any]]:
    """Return ``{"url", "sources"}`` for every URL claimed twice."""
    owners: dict[str, list[str]] = {}
    for doc in documents:
        owners.setdefault(doc.url, []).append(doc.source)
    return [
        {"url": url, "sources": sources}
        for url, sources in sorted(owners.items())
        if len(sources) > 1
    ]
