"""Site: repository object over the source tree.

The Site is the single dependency injected into every service. It owns
path resolution, content loading, the template environment, and the
plugin manager. Writes to source files go through :meth:`Site.transaction`
so a failed multi-file operation leaves no partial edits behind:

- newly created files are deleted on rollback;
- modified files are restored from their backup.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from markupsafe import Markup
from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from folio.domain.content import Document, Page, Post, sort_posts
from folio.domain.tags import group_by_tag
from folio.infrastructure.filesystem import (
    find_drafts,
    find_pages,
    find_posts,
    find_static_files,
    read_content_file,
    relative_source,
    write_content_file,
)
from folio.infrastructure.markdown import make_excerpt
from folio.infrastructure.templates import (
    TemplateRenderer,
    build_template_environment,
    make_filters,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from folio.config.settings import FolioSettings
    from folio.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

# Layouts shipped in folio/templates/site.
PACKAGED_LAYOUTS: tuple[str, ...] = ("default", "page", "post")


# ---------------------------------------------------------------------------
# File operation tracking for compensation-based rollback
# ---------------------------------------------------------------------------


@dataclass
class _FileOp:
    """A tracked file write within a site transaction."""

    path: Path
    backup: str | None  # original content for updates, None for creates

    def rollback(self) -> None:
        """Undo this file operation (best-effort)."""
        try:
            if self.backup is not None:
                self.path.write_text(self.backup, encoding="utf-8")
            else:
                self.path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to rollback file operation: %s", self.path)


@dataclass
class SiteTransaction:
    """Active transaction with tracked file I/O.

    All source writes must go through :meth:`write_file` so the Site can
    compensate on rollback.
    """

    _file_ops: list[_FileOp] = field(default_factory=list, repr=False)

    def _track(self, path: Path) -> None:
        backup = path.read_text(encoding="utf-8") if path.exists() else None
        self._file_ops.append(_FileOp(path=path, backup=backup))

    def write_file(self, path: Path, content: str) -> None:
        """Write *content* to *path*, tracking for rollback."""
        self._track(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def write_content(self, path: Path, frontmatter: dict[str, Any], body: str) -> None:
        """Render front matter + body and write to *path* (tracked)."""
        self._track(path)
        write_content_file(path, frontmatter, body)

    @property
    def written(self) -> list[Path]:
        return [op.path for op in self._file_ops]

    def rollback(self) -> None:
        """Undo every tracked write, newest first."""
        for op in reversed(self._file_ops):
            op.rollback()
        self._file_ops.clear()


# ---------------------------------------------------------------------------
# Loaded content
# ---------------------------------------------------------------------------


@dataclass
class SiteContent:
    """Everything one build needs, loaded fresh from disk.

    Attributes:
        posts: Visible posts, newest first.
        pages: Standalone pages in path order.
        static_files: Files copied verbatim.
        hidden: Posts excluded from output (unpublished or future-dated).
        invalid: ``(source, message)`` for files that could not be parsed.
    """

    posts: list[Post] = field(default_factory=list)
    pages: list[Page] = field(default_factory=list)
    static_files: list[Path] = field(default_factory=list)
    hidden: list[Post] = field(default_factory=list)
    invalid: list[tuple[str, str]] = field(default_factory=list)

    @property
    def documents(self) -> list[Document]:
        return [*self.posts, *self.pages]

    @property
    def warnings(self) -> list[str]:
        return [f"Skipped {source}: {message}" for source, message in self.invalid]


# ---------------------------------------------------------------------------
# Site: the repository
# ---------------------------------------------------------------------------


class Site:
    """Repository over a site's source directory.

    Constructed lazily by the CLI from :class:`FolioSettings`. Services
    receive the Site via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: FolioSettings) -> None:
        self._settings = settings
        self._plugin_manager: PluginManager | None = None
        self._renderer: TemplateRenderer | None = None

    @property
    def root(self) -> Path:
        """The site source directory."""
        return self._settings.site_root

    @property
    def settings(self) -> FolioSettings:
        return self._settings

    @property
    def output_root(self) -> Path:
        return self._settings.output_root

    @property
    def layouts_path(self) -> Path:
        return self.root / self._settings.build.layouts_dir

    def exists(self) -> bool:
        """True when the root holds a config file or any content directory."""
        build = self._settings.build
        return (
            self._settings.config_path is not None
            or (self.root / build.posts_dir).is_dir()
            or self.layouts_path.is_dir()
        )

    # ------------------------------------------------------------------
    # Plugins and templates (lazy)
    # ------------------------------------------------------------------

    @property
    def plugin_manager(self) -> PluginManager:
        """Plugin manager with built-ins, entry points, and ``_plugins/``."""
        if self._plugin_manager is None:
            from folio.plugins.manager import PluginManager

            pm = PluginManager()
            pm.discover_and_load(
                builtins=self._settings.plugins.enabled,
                local_dir=self.root / self._settings.build.plugins_dir,
            )
            self._plugin_manager = pm
        return self._plugin_manager

    @property
    def renderer(self) -> TemplateRenderer:
        """Template renderer with site overrides, filters, and plugin filters."""
        if self._renderer is None:
            registry: dict[str, dict[str, Any]] = {}
            env = build_template_environment(
                "site",
                site_root=self.root,
                layouts_dir=self._settings.build.layouts_dir,
                includes_dir=self._settings.build.includes_dir,
                registry=registry,
            )
            env.filters.update(make_filters(self._settings.site))
            results, failures = self.plugin_manager.call_each("register_filters")
            self.plugin_manager.warnings.extend(failures)
            for _name, extra in results:
                if extra:
                    env.filters.update(extra)
            self._renderer = TemplateRenderer(env, registry, layouts=self.layouts())
        return self._renderer

    def layouts(self) -> list[str]:
        """Names of all available layouts (site files and packaged defaults)."""
        names = set(PACKAGED_LAYOUTS)
        if self.layouts_path.is_dir():
            names.update(p.stem for p in self.layouts_path.glob("*.html"))
        return sorted(names)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, *, drafts: bool | None = None, today: date | None = None) -> SiteContent:
        """Read every post, draft, page, and static file from disk.

        Posts with ``published: false`` or a date after *today* (unless
        ``build.future``) go to :attr:`SiteContent.hidden`.
        """
        build = self._settings.build
        include_drafts = build.drafts if drafts is None else drafts
        cutoff = today or datetime.now(UTC).date()
        content = SiteContent()

        sources: list[tuple[Path, bool]] = [(p, False) for p in find_posts(self.root, build.posts_dir)]
        if include_drafts:
            sources.extend((p, True) for p in find_drafts(self.root, build.drafts_dir))

        visible: list[Post] = []
        for path, is_draft in sources:
            post = self._load_post(path, draft=is_draft, content=content)
            if post is None:
                continue
            if not post.published or (not build.future and post.date and post.date > cutoff):
                content.hidden.append(post)
            else:
                visible.append(post)
        content.posts = sort_posts(visible)
        content.hidden = sort_posts(content.hidden)

        for path in find_pages(self.root, self._settings):
            page = self._load_page(path, content=content)
            if page is not None and page.published:
                content.pages.append(page)

        content.static_files = find_static_files(self.root, self._settings)
        logger.debug(
            "Loaded %d posts, %d pages, %d static files",
            len(content.posts),
            len(content.pages),
            len(content.static_files),
        )
        return content

    def _load_post(self, path: Path, *, draft: bool, content: SiteContent) -> Post | None:
        rel = relative_source(self.root, path)
        try:
            fm, body = read_content_file(path)
            fallback = datetime.fromtimestamp(path.stat().st_mtime, UTC).date() if draft else None
            return Post.from_source(
                rel,
                fm,
                body,
                permalink=self._settings.build.permalink,
                fallback_date=fallback,
                draft=draft,
            )
        except (ValueError, ValidationError, YAMLError) as exc:
            self._record_invalid(content, rel, exc)
            return None

    def _load_page(self, path: Path, *, content: SiteContent) -> Page | None:
        rel = relative_source(self.root, path)
        try:
            fm, body = read_content_file(path)
            return Page.from_source(rel, fm, body)
        except (ValueError, ValidationError, YAMLError) as exc:
            self._record_invalid(content, rel, exc)
            return None

    @staticmethod
    def _record_invalid(content: SiteContent, source: str, exc: Exception) -> None:
        message = str(exc).splitlines()[0] if str(exc) else exc.__class__.__name__
        content.invalid.append((source, message))
        logger.warning("Skipping %s: %s", source, message)

    # ------------------------------------------------------------------
    # Template context
    # ------------------------------------------------------------------

    def site_context(
        self, content: SiteContent, rendered: Mapping[str, str] | None = None
    ) -> dict[str, Any]:
        """Return the mapping exposed to templates as ``site``.

        *rendered* maps post URLs to their body HTML; when given, each post
        in ``site.posts`` carries ``content`` and ``excerpt``.
        """
        ctx: dict[str, Any] = self._settings.site.model_dump()
        posts: list[dict[str, Any]] = []
        for post in content.posts:
            post_ctx = post.to_context()
            if rendered is not None and post.url in rendered:
                html = rendered[post.url]
                post_ctx["content"] = Markup(html)
                post_ctx["excerpt"] = Markup(make_excerpt(html))
            posts.append(post_ctx)
        by_url = {p["url"]: p for p in posts}
        ctx.update(
            {
                "posts": posts,
                "pages": [p.to_context() for p in content.pages],
                "tags": {
                    tag: [by_url[d.url] for d in docs]
                    for tag, docs in group_by_tag(content.posts).items()
                },
                "time": datetime.now(UTC),
                "stylesheet": "/" + self._settings.css.output.lstrip("/"),
                "feed_path": "/" + self._settings.feed.path.lstrip("/"),
            }
        )
        return ctx

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[SiteTransaction]:
        """Track source writes; roll all of them back if the block raises.

        Usage::

            with site.transaction() as txn:
                txn.write_content(path, frontmatter, body)
        """
        txn = SiteTransaction()
        try:
            yield txn
        except BaseException:
            txn.rollback()
            raise
