"""Shared pytest fixtures and test helpers for folio tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from folio.config.settings import FolioSettings
from folio.infrastructure.site import Site
from folio.services.telemetry import disable_telemetry


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's FOLIO_* environment out of the tests."""
    monkeypatch.delenv("FOLIO_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the logging and telemetry state a CLI run leaves behind."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site scaffolded by ``InitService``.

    This is the single source of truth for the site layout. All site
    fixtures (site, _isolated_site) build on this.
    """
    from folio.services.init import InitService

    result = InitService.init_site(
        tmp_path, title="Test Blog", url="https://blog.example.com", author="Ada"
    )
    assert result.ok, result.error
    return tmp_path


@pytest.fixture
def site(site_root: Path) -> Generator[Site]:
    """Site over the scaffolded directory, with built-in plugins only."""
    settings = FolioSettings.from_cli(site_root=site_root)
    yield Site(settings)


@pytest.fixture
def bare_root(tmp_path: Path) -> Path:
    """A minimal site: config file and empty posts directory, no layouts."""
    (tmp_path / "folio.toml").write_text(
        '[site]\ntitle = "Bare"\nurl = "https://bare.example.com"\n', encoding="utf-8"
    )
    (tmp_path / "_posts").mkdir()
    return tmp_path


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the scaffolded site so the CLI discovers its config.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes. Tests that need the path can also request ``site_root``.
    """
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def make_site(root: Path, **overrides: Any) -> Site:
    """Fresh Site over *root*; *overrides* are FolioSettings fields."""
    return Site(FolioSettings.from_cli(site_root=root, **overrides))


def write_post(
    root: Path,
    name: str,
    body: str = "Body text.",
    *,
    directory: str = "_posts",
    **frontmatter: Any,
) -> Path:
    """Write ``<directory>/<name>`` with the given front matter."""
    from folio.domain.content import render_frontmatter

    fm = {"layout": "post", **frontmatter}
    path = root / directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_frontmatter(fm, body), encoding="utf-8")
    return path


def write_page(root: Path, name: str, body: str = "<p>Page.</p>", **frontmatter: Any) -> Path:
    """Write a page at ``root/name`` with the given front matter."""
    from folio.domain.content import render_frontmatter

    fm = {"layout": "page", **frontmatter}
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_frontmatter(fm, body), encoding="utf-8")
    return path


def build_site(site: Site, **kwargs: Any) -> dict[str, Any]:
    """Build via BuildService, asserting success."""
    from folio.services.build import BuildService

    result = BuildService(site).build(**kwargs)
    assert result.ok, result.error
    return result.data
