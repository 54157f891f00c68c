"""InitService: scaffold a new site directory.

Writes ``folio.toml``, the default layouts and includes, the standard
pages (home, blog, projects, tools, services, contacts), a welcome post,
and the base stylesheet. Refuses a directory that already has a config.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

from folio.config.discovery import CONFIG_FILENAME, load_config
from folio.infrastructure.site import SiteTransaction
from folio.infrastructure.templates import build_file_environment
from folio.services._helpers import today
from folio.services.result import ErrorCode, ServiceResult
from folio.services.telemetry import traced

logger = logging.getLogger(__name__)

# (scaffold template, destination relative to the site root)
RENDERED_FILES: tuple[tuple[str, str], ...] = (
    ("folio.toml.j2", CONFIG_FILENAME),
    ("gitignore.j2", ".gitignore"),
    ("index.html.j2", "index.html"),
    ("blog.html.j2", "blog.html"),
    ("projects.html.j2", "projects.html"),
    ("tools.html.j2", "tools.html"),
    ("services.html.j2", "services.html"),
    ("contacts.html.j2", "contacts.html"),
    ("base.css.j2", "assets/css/base.css"),
)

LAYOUT_FILES: tuple[str, ...] = ("default.html", "page.html", "post.html")
INCLUDE_FILES: tuple[str, ...] = ("head.html", "seo.html", "nav.html", "footer.html")


class InitService:
    """Site scaffolding. Static: there is no site to inject yet."""

    @staticmethod
    @traced
    def init_site(
        path: Path,
        *,
        title: str,
        url: str = "http://localhost:4000",
        author: str = "",
    ) -> ServiceResult:
        """Scaffold a site at *path*; all files roll back if any write fails."""
        op = "init_site"
        root = path.resolve()
        if (root / CONFIG_FILENAME).exists():
            return ServiceResult.failure(
                op,
                ErrorCode.ALREADY_EXISTS,
                f"{CONFIG_FILENAME} already exists in {root}",
                path=str(root),
            )
        if not title.strip():
            return ServiceResult.failure(op, ErrorCode.VALIDATION_FAILED, "Title must not be empty")

        env = build_file_environment("scaffold")
        created_on = today()
        ctx = {"title": title, "url": url.rstrip("/"), "author": author, "today": created_on}
        packaged = resources.files("folio") / "templates" / "site"

        targets: list[tuple[str, str]] = [
            (dest, env.get_template(name).render(ctx)) for name, dest in RENDERED_FILES
        ]
        targets.append(
            (
                f"_posts/{created_on.isoformat()}-welcome.md",
                env.get_template("welcome.md.j2").render(ctx),
            )
        )
        targets.extend(
            (f"_layouts/{name}", (packaged / name).read_text(encoding="utf-8"))
            for name in LAYOUT_FILES
        )
        targets.extend(
            (f"_includes/{name}", (packaged / name).read_text(encoding="utf-8"))
            for name in INCLUDE_FILES
        )

        txn = SiteTransaction()
        try:
            for rel, text in targets:
                if (root / rel).exists():
                    logger.debug("Keeping existing %s", rel)
                    continue
                txn.write_file(root / rel, text)
            load_config(root / CONFIG_FILENAME)
        except BaseException:
            txn.rollback()
            raise

        files = sorted(p.relative_to(root).as_posix() for p in txn.written)
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(root), "title": title, "url": ctx["url"], "files": files},
        )
