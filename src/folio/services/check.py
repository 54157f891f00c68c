"""CheckService: site hygiene report and safe repairs.

Single command following the linter pattern. Three categories:

- ``frontmatter``: unparsable files, missing/unknown layout, missing title
  or description.
- ``seo``: duplicate titles and duplicate permalinks across published
  documents.
- ``output``: only when the output directory exists. Every generated page
  has a ``<title>`` and a canonical link, titles are unique, and the
  sitemap lists every published post.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup

from folio.domain.content import validate_document
from folio.domain.permalinks import absolute_url
from folio.domain.slugs import title_from_slug
from folio.plugins.builtins.sitemap import SITEMAP_FILENAME, read_sitemap_locations
from folio.services.base import BaseService
from folio.services.result import ErrorCode, ServiceResult
from folio.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from folio.domain.content import Document
    from folio.infrastructure.site import SiteContent


# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_RANK: dict[str, int] = {SEVERITY_WARNING: 1, SEVERITY_ERROR: 2}

CAT_FRONTMATTER = "frontmatter"
CAT_SEO = "seo"
CAT_OUTPUT = "output"

FIX_ADD_LAYOUT = "add_layout"
FIX_DERIVE_TITLE = "derive_title"


def _issue(
    category: str,
    severity: str,
    source: str | None,
    message: str,
    fix_action: str | None = None,
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "source": source,
        "message": message,
        "fix_action": fix_action,
    }


# ---------------------------------------------------------------------------
# CheckService
# ---------------------------------------------------------------------------


class CheckService(BaseService):
    """Reports authoring and output defects; repairs the safe ones."""

    @traced
    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report issues at or above *min_severity* without modifying anything."""
        op = "check"
        if min_severity not in SEVERITY_RANK:
            return ServiceResult.failure(
                op,
                ErrorCode.VALIDATION_FAILED,
                f"Unknown severity {min_severity!r}; expected one of {sorted(SEVERITY_RANK)}",
            )
        if not self._site.exists():
            return ServiceResult.failure(
                op, ErrorCode.NO_SITE, f"No folio site found at {self._site.root}"
            )

        content = self._site.load(drafts=False)
        issues: list[dict[str, Any]] = []
        with trace_span(CAT_FRONTMATTER):
            issues.extend(self._check_frontmatter(content))
        with trace_span(CAT_SEO):
            issues.extend(self._check_seo(content))
        with trace_span(CAT_OUTPUT):
            issues.extend(self._check_output(content))

        threshold = SEVERITY_RANK[min_severity]
        issues = [i for i in issues if SEVERITY_RANK[i["severity"]] >= threshold]
        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "issues": issues,
                "count": len(issues),
                "error_count": error_count,
                "warning_count": len(issues) - error_count,
                "healthy": error_count == 0,
            },
            warnings=self._plugin_warnings(),
        )

    @traced
    def fix(self) -> ServiceResult:
        """Add missing layouts and derive missing post titles.

        Rewritten files get their front matter in canonical key order.
        All writes roll back together if any one fails.
        """
        op = "fix"
        if not self._site.exists():
            return ServiceResult.failure(
                op, ErrorCode.NO_SITE, f"No folio site found at {self._site.root}"
            )

        build = self._site.settings.build
        content = self._site.load(drafts=True)
        fixes: list[str] = []
        with self._site.transaction() as txn:
            for doc in [*content.posts, *content.hidden, *content.pages]:
                changes: dict[str, Any] = {}
                if not doc.layout:
                    changes["layout"] = build.post_layout if doc.kind == "post" else build.page_layout
                if doc.kind == "post" and not doc.title:
                    changes["title"] = title_from_slug(doc.slug)
                if not changes:
                    continue
                txn.write_content(self._site.root / doc.source, doc.with_frontmatter(**changes), doc.body)
                fixes.extend(f"{doc.source}: set {key} to {value!r}" for key, value in changes.items())

        return ServiceResult(
            ok=True,
            op=op,
            data={"fixes": fixes, "count": len(fixes)},
            warnings=[f"Skipped {s}: {m}" for s, m in content.invalid],
        )

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_frontmatter(self, content: SiteContent) -> list[dict[str, Any]]:
        issues = [
            _issue(CAT_FRONTMATTER, SEVERITY_ERROR, source, f"Invalid front matter: {message}")
            for source, message in content.invalid
        ]
        layouts = self._site.layouts()
        for doc in content.documents:
            result = validate_document(doc, known_layouts=layouts)
            for error in result.errors:
                fix_action = None
                if error.startswith("Missing 'layout'"):
                    fix_action = FIX_ADD_LAYOUT
                elif error.startswith("Missing 'title'") and doc.kind == "post":
                    fix_action = FIX_DERIVE_TITLE
                issues.append(_issue(CAT_FRONTMATTER, SEVERITY_ERROR, doc.source, error, fix_action))
            for warning in result.warnings:
                issues.append(_issue(CAT_FRONTMATTER, SEVERITY_WARNING, doc.source, warning))
        return issues

    def _check_seo(self, content: SiteContent) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        for title, docs in _group(content.documents, lambda d: d.title).items():
            if len(docs) > 1:
                sources = ", ".join(d.source for d in docs)
                issues.append(
                    _issue(CAT_SEO, SEVERITY_WARNING, docs[0].source, f"Duplicate title {title!r}: {sources}")
                )
        for url, docs in _group(content.documents, lambda d: d.url).items():
            if len(docs) > 1:
                sources = ", ".join(d.source for d in docs)
                issues.append(
                    _issue(CAT_SEO, SEVERITY_ERROR, docs[0].source, f"Duplicate permalink {url}: {sources}")
                )
        return issues

    def _check_output(self, content: SiteContent) -> list[dict[str, Any]]:
        output_root = self._site.output_root
        if not output_root.is_dir():
            return []

        issues: list[dict[str, Any]] = []
        seen_titles: dict[str, str] = {}
        for doc in content.documents:
            path = output_root / doc.output_path
            if not path.is_file():
                issues.append(
                    _issue(CAT_OUTPUT, SEVERITY_WARNING, doc.source, f"Not built yet: {doc.output_path}")
                )
                continue
            soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
            title_tag = soup.find("title")
            title = title_tag.get_text(strip=True) if title_tag else ""
            if not title:
                issues.append(
                    _issue(
                        CAT_OUTPUT,
                        SEVERITY_ERROR,
                        doc.source,
                        f"{doc.output_path} has no <title>",
                        FIX_ADD_LAYOUT if not doc.layout else None,
                    )
                )
            elif title in seen_titles:
                issues.append(
                    _issue(
                        CAT_OUTPUT,
                        SEVERITY_WARNING,
                        doc.source,
                        f"<title> {title!r} also used by {seen_titles[title]}",
                    )
                )
            else:
                seen_titles[title] = doc.source
            if soup.find("link", rel="canonical") is None:
                issues.append(
                    _issue(CAT_OUTPUT, SEVERITY_ERROR, doc.source, f"{doc.output_path} has no canonical link")
                )

        if self._site.plugin_manager.has_plugin("sitemap"):
            issues.extend(self._check_sitemap(content))
        return issues

    def _check_sitemap(self, content: SiteContent) -> list[dict[str, Any]]:
        sitemap_path = self._site.output_root / SITEMAP_FILENAME
        if not sitemap_path.is_file():
            return [_issue(CAT_OUTPUT, SEVERITY_ERROR, None, f"{SITEMAP_FILENAME} is missing")]
        try:
            locations = read_sitemap_locations(sitemap_path)
        except ET.ParseError as exc:
            return [_issue(CAT_OUTPUT, SEVERITY_ERROR, None, f"{SITEMAP_FILENAME} is not valid XML: {exc}")]

        site_cfg = self._site.settings.site
        issues: list[dict[str, Any]] = []
        for post in content.posts:
            if not post.sitemap:
                continue
            loc = absolute_url(post.url, origin=site_cfg.url, baseurl=site_cfg.baseurl)
            if loc not in locations:
                issues.append(
                    _issue(CAT_OUTPUT, SEVERITY_ERROR, post.source, f"{SITEMAP_FILENAME} does not list {loc}")
                )
        return issues


def _group(documents: list[Document], key: Any) -> dict[str, list[Document]]:
    groups: dict[str, list[Document]] = {}
    for doc in documents:
        value = key(doc)
        if value:
            groups.setdefault(value, []).append(doc)
    return groups
