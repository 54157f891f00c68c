"""Jinja2 template loading, filters, and layout chaining.

Templates use Jinja2 syntax as the Liquid-like template language:
``{{ page.title }}``, ``{% include "head.html" %}``, ``{{ content }}``.

Site files override packaged defaults: the site's ``_layouts/`` and
``_includes/`` directories are searched before ``folio/templates/<group>``.
Layout files may start with a front-matter block naming a parent
``layout``; the block is stripped before Jinja sees the source.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import (
    BaseLoader,
    ChainableUndefined,
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)
from markupsafe import Markup, escape
from ruamel.yaml.error import YAMLError

from folio.domain.content import parse_frontmatter
from folio.domain.permalinks import absolute_url as join_absolute
from folio.domain.permalinks import site_relative_url
from folio.domain.slugs import slugify
from folio.infrastructure.markdown import strip_html

if TYPE_CHECKING:
    from folio.config.models import SiteConfig


class LayoutError(TemplateError):
    """A layout is missing or the layout chain loops."""


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------


class _FrontmatterStripping:
    """Loader mixin: strip a leading front-matter block and remember it."""

    def __init__(self, *args: Any, registry: dict[str, dict[str, Any]], **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._registry = registry

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str | None, Callable[[], bool] | None]:
        source, filename, uptodate = super().get_source(environment, template)  # type: ignore[misc]
        try:
            fm, body = parse_frontmatter(source)
        except (YAMLError, ValueError) as exc:
            msg = f"Invalid front matter: {exc}"
            raise TemplateSyntaxError(msg, 1, name=template, filename=filename) from exc
        self._registry.setdefault(template, dict(fm))
        return body, filename, uptodate


class FrontmatterFileSystemLoader(_FrontmatterStripping, FileSystemLoader):
    """FileSystemLoader that hides layout front matter from Jinja."""


class FrontmatterPackageLoader(_FrontmatterStripping, PackageLoader):
    """PackageLoader that hides layout front matter from Jinja."""


def build_template_environment(
    group: str,
    *,
    site_root: Path | None = None,
    layouts_dir: str = "_layouts",
    includes_dir: str = "_includes",
    registry: dict[str, dict[str, Any]] | None = None,
) -> Environment:
    """Build a Jinja2 environment with site overrides before packaged defaults.

    Args:
        group: Packaged template group under ``folio/templates/``
            (``site``, ``content``, ``scaffold``).
        site_root: Site directory; when given, its *layouts_dir* and
            *includes_dir* are searched before the packaged templates.
        registry: Receives the front matter of each loaded template, keyed
            by template name.
    """
    fm_registry: dict[str, dict[str, Any]] = registry if registry is not None else {}
    loaders: list[BaseLoader] = []
    if site_root is not None:
        dirs = [str(site_root / layouts_dir), str(site_root / includes_dir)]
        loaders.append(FrontmatterFileSystemLoader(dirs, registry=fm_registry))
    loaders.append(
        FrontmatterPackageLoader("folio", f"templates/{group}", registry=fm_registry)
    )
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=select_autoescape(["html", "xml"], default_for_string=True),
        undefined=ChainableUndefined,
        keep_trailing_newline=True,
    )


def build_file_environment(group: str) -> Environment:
    """Environment for packaged file generators (``content``, ``scaffold``).

    Sources are used verbatim, front matter included.
    """
    return Environment(
        loader=PackageLoader("folio", f"templates/{group}"),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def _get(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def make_filters(site: SiteConfig) -> dict[str, Callable[..., Any]]:
    """Return the Liquid-style filters bound to *site*'s URL settings."""

    def relative_url(path: Any) -> str:
        return site_relative_url(str(path or ""), site.baseurl)

    def absolute_url(path: Any) -> str:
        return join_absolute(str(path or ""), origin=site.url, baseurl=site.baseurl)

    def date_to_xmlschema(value: Any) -> str:
        if isinstance(value, (date, datetime)):
            return value.isoformat()
        return str(value or "")

    def date_to_string(value: Any, fmt: str = "%d %b %Y") -> str:
        if isinstance(value, (date, datetime)):
            return value.strftime(fmt)
        return str(value or "")

    def xml_escape(value: Any) -> Markup:
        return escape(str(value or ""))

    def truncatewords(value: Any, count: int = 30, end: str = "...") -> str:
        words = str(value or "").split()
        if len(words) <= count:
            return " ".join(words)
        return " ".join(words[:count]) + end

    def where(items: Iterable[Any], key: str, value: Any) -> list[Any]:
        selected: list[Any] = []
        for item in items or []:
            found = _get(item, key)
            if found == value or (isinstance(found, list) and value in found):
                selected.append(item)
        return selected

    def sort_by(items: Iterable[Any], key: str, reverse: bool = False) -> list[Any]:
        present = [i for i in items or [] if _get(i, key) is not None]
        missing = [i for i in items or [] if _get(i, key) is None]
        return sorted(present, key=lambda i: _get(i, key), reverse=reverse) + missing

    return {
        "relative_url": relative_url,
        "absolute_url": absolute_url,
        "date_to_xmlschema": date_to_xmlschema,
        "date_to_string": date_to_string,
        "xml_escape": xml_escape,
        "slugify": lambda value: slugify(str(value or "")),
        "strip_html": lambda value: strip_html(str(value or "")),
        "truncatewords": truncatewords,
        "where": where,
        "sort_by": sort_by,
    }


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Render document bodies and wrap them in their layout chain."""

    def __init__(
        self,
        env: Environment,
        registry: dict[str, dict[str, Any]],
        layouts: Iterable[str] | None = None,
    ) -> None:
        self._env = env
        self._registry = registry
        # None means any loadable template may act as a layout.
        self._layouts = frozenset(layouts) if layouts is not None else None

    def render_string(self, source: str, context: Mapping[str, Any]) -> str:
        """Render *source* as a template with *context*."""
        return self._env.from_string(source).render(context)

    def layout_chain(self, name: str) -> list[str]:
        """Resolve *name* and its parents, innermost first.

        Raises:
            LayoutError: A layout in the chain does not exist, or the chain
                contains a cycle.
        """
        chain: list[str] = []
        current: str | None = name
        while current:
            if current in chain:
                msg = f"Layout cycle: {' -> '.join([*chain, current])}"
                raise LayoutError(msg)
            template_name = f"{current}.html"
            if self._layouts is not None and current not in self._layouts:
                msg = f"Layout not found: {current!r}"
                raise LayoutError(msg)
            try:
                self._env.get_template(template_name)
            except TemplateNotFound as exc:
                msg = f"Layout not found: {current!r}"
                raise LayoutError(msg) from exc
            chain.append(current)
            parent = self._registry.get(template_name, {}).get("layout")
            current = str(parent) if parent else None
        return chain

    def apply_layouts(self, layout: str | None, content: str, context: Mapping[str, Any]) -> str:
        """Wrap *content* in *layout* and every parent layout.

        A document without a layout is returned unchanged, without a head
        or title. :mod:`folio.services.check` reports that case.
        """
        if not layout:
            return content
        html = content
        for name in self.layout_chain(layout):
            template = self._env.get_template(f"{name}.html")
            layout_fm = self._registry.get(f"{name}.html", {})
            html = template.render({**context, "content": Markup(html), "layout": layout_fm})
        return html
