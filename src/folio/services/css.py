"""CssService: pruned utility stylesheet.

Pipeline: SCAN content globs → COLLECT classes → GENERATE rules →
PREPEND base stylesheet → MINIFY (optional) → WRITE.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

import csscompressor

from folio.css import Theme, collect_classes, expand_content_globs, generate_stylesheet
from folio.services.base import BaseService
from folio.services.result import ErrorCode, ServiceResult
from folio.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)

# Unknown classes listed in the result; the count is always complete.
UNKNOWN_SAMPLE = 50


class CssService(BaseService):
    """Generates the site stylesheet from the classes its markup uses."""

    @traced
    def build_css(self, *, dest_root: Path | None = None) -> ServiceResult:
        """Write ``[css] output`` below *dest_root* (default: the site root).

        The build passes its output directory so the generated stylesheet
        is published without touching the source tree.
        """
        op = "build_css"
        cfg = self._site.settings.css
        root = self._site.root
        warnings: list[str] = []

        with trace_span("scan") as span:
            files = expand_content_globs(root, cfg.content)
            classes = collect_classes([*files, *self._packaged_templates()])
            if span:
                span.annotate("files", len(files))
                span.annotate("classes", len(classes))
        if not files:
            warnings.append(f"No files matched [css] content globs: {', '.join(cfg.content)}")

        theme = Theme(font_family=dict(cfg.theme.font_family), colors=dict(cfg.theme.colors))
        with trace_span("generate"):
            sheet = generate_stylesheet(classes, theme)

        css = sheet.css
        if cfg.input:
            base_path = root / cfg.input
            if base_path.is_file():
                css = base_path.read_text(encoding="utf-8").rstrip("\n") + "\n\n" + css
            else:
                warnings.append(f"Base stylesheet not found: {cfg.input}")
        if cfg.minify:
            css = csscompressor.compress(css)

        dest = (dest_root or root) / cfg.output
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(css, encoding="utf-8")
        except OSError as exc:
            return ServiceResult.failure(
                op, ErrorCode.CSS_FAILED, f"Cannot write {cfg.output}: {exc}", warnings=warnings
            )

        logger.debug("Wrote %s (%d rules)", dest, sheet.rule_count)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "output": cfg.output,
                "path": str(dest),
                "files_scanned": len(files),
                "class_count": len(sheet.classes),
                "rule_count": sheet.rule_count,
                "unknown_count": len(sheet.unknown),
                "unknown": sheet.unknown[:UNKNOWN_SAMPLE],
                "bytes": len(css.encode("utf-8")),
                "minified": cfg.minify,
            },
            warnings=warnings,
        )

    def _packaged_templates(self) -> list[Path]:
        """Packaged layouts and includes the site does not override."""
        build = self._site.settings.build
        overridden = {
            p.name
            for d in (build.layouts_dir, build.includes_dir)
            if (self._site.root / d).is_dir()
            for p in (self._site.root / d).glob("*.html")
        }
        packaged = Path(str(resources.files("folio") / "templates" / "site"))
        return sorted(p for p in packaged.glob("*.html") if p.name not in overridden)
