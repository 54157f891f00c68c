"""Filesystem operations for site content.

INVARIANT: Files are truth. Nothing is cached between builds; every
build walks the source tree again.

Pure parsing/rendering utilities live in :mod:`folio.domain.content`
(correct dependency direction: infrastructure -> domain). This module
handles actual file I/O, path resolution, and file discovery.
"""

from __future__ import annotations

import fnmatch
import shutil
from collections.abc import Iterable
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from folio.domain.content import has_frontmatter, parse_frontmatter, render_frontmatter
from folio.domain.permalinks import PAGE_EXTENSIONS, url_to_output_path

if TYPE_CHECKING:
    from folio.config.settings import FolioSettings

POST_EXTENSIONS = frozenset({".md", ".markdown", ".html"})

# Files at the site root that are never published.
_ALWAYS_EXCLUDED = frozenset({"folio.toml", ".gitignore", ".DS_Store"})


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_content_file(path: Path) -> tuple[dict[str, Any], str]:
    """Read a content file, returning ``(frontmatter, body)``."""
    content = path.read_text(encoding="utf-8")
    return parse_frontmatter(content)


def write_content_file(path: Path, frontmatter: dict[str, Any], body: str) -> None:
    """Write front matter + body to a content file.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = render_frontmatter(frontmatter, body)
    path.write_text(rendered, encoding="utf-8")


def write_output_file(output_root: Path, url: str, html: str) -> Path:
    """Write rendered *html* for *url* below *output_root*; return the path."""
    dest = resolve_output_path(output_root, url)
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(html, encoding="utf-8")
    return dest


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def relative_source(root: Path, path: Path) -> str:
    """Return *path* relative to *root* as a POSIX string."""
    return path.relative_to(root).as_posix()


def resolve_output_path(output_root: Path, url: str) -> Path:
    """Resolve the output file for *url*.

    Raises:
        ValueError: If the URL would escape the output directory.
    """
    result = output_root / url_to_output_path(url)
    if not result.resolve().is_relative_to(output_root.resolve()):
        msg = f"Path escapes output root: {url}"
        raise ValueError(msg)
    return result


def _is_excluded(rel: PurePosixPath, patterns: Iterable[str]) -> bool:
    text = rel.as_posix()
    return any(fnmatch.fnmatch(text, pat) or fnmatch.fnmatch(rel.name, pat) for pat in patterns)


def _walk_site(root: Path, settings: FolioSettings) -> list[Path]:
    """Walk publishable files, skipping ``_*``/dot dirs and the output dir."""
    resolved_root = root.resolve()
    output_root = settings.output_root.resolve()
    exclude = settings.build.exclude
    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file():
            continue
        rel = PurePosixPath(relative_source(root, path))
        if resolved_root.joinpath(*rel.parts).is_relative_to(output_root):
            continue
        if any(part.startswith(("_", ".")) for part in rel.parts[:-1]):
            continue
        if rel.name.startswith(("_", ".")) or rel.as_posix() in _ALWAYS_EXCLUDED:
            continue
        if _is_excluded(rel, exclude):
            continue
        results.append(path)
    return sorted(results)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_posts(root: Path, posts_dir: str) -> list[Path]:
    """Discover post files under *posts_dir* (recursively)."""
    base = root / posts_dir
    if not base.is_dir():
        return []
    return sorted(
        p for p in base.rglob("*") if p.is_file() and p.suffix in POST_EXTENSIONS
    )


def find_drafts(root: Path, drafts_dir: str) -> list[Path]:
    """Discover draft files under *drafts_dir*."""
    return find_posts(root, drafts_dir)


def _is_page(path: Path) -> bool:
    if path.suffix not in PAGE_EXTENSIONS:
        return False
    try:
        head = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    return has_frontmatter(head)


def find_pages(root: Path, settings: FolioSettings) -> list[Path]:
    """Discover standalone pages: ``.html``/``.md`` files with front matter."""
    return [p for p in _walk_site(root, settings) if _is_page(p)]


def find_static_files(root: Path, settings: FolioSettings) -> list[Path]:
    """Discover files copied verbatim (anything that is not a page)."""
    return [p for p in _walk_site(root, settings) if not _is_page(p)]


def copy_static(files: Iterable[Path], root: Path, output_root: Path) -> list[str]:
    """Copy *files* to *output_root*, preserving relative paths.

    Returns the list of written paths relative to *output_root*.
    """
    written: list[str] = []
    for src in files:
        rel = relative_source(root, src)
        dest = output_root / rel
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
        written.append(rel)
    return written


def clean_output(output_root: Path) -> None:
    """Remove everything inside *output_root* (the directory itself stays)."""
    if not output_root.is_dir():
        return
    for child in output_root.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
