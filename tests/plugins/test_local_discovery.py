"""Tests for single-file plugins in a site's ``_plugins/`` directory."""

from __future__ import annotations

from pathlib import Path

from folio.plugins.hookspecs import hookimpl
from folio.plugins.manager import PluginManager

_VALID_PLUGIN_SRC = """\
from folio.plugins.hookspecs import hookimpl


class Shout:
    \"\"\"Upper-cases every rendered document.\"\"\"

    @hookimpl
    def post_render(self, html):
        return html.upper()
"""

_SYNTAX_ERROR_SRC = """\
def broken(
    # missing closing paren and colon
"""

_NO_HOOKS_SRC = """\
class PlainClass:
    def hello(self):
        return "world"
"""

_FAILING_INIT_SRC = """\
from folio.plugins.hookspecs import hookimpl


class NeedsArgs:
    def __init__(self, required):
        self.required = required

    @hookimpl
    def post_render(self, html):
        return html
"""


def _write(directory: Path, name: str, source: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(source, encoding="utf-8")


class TestLocalDiscovery:
    def test_discovers_local_plugin(self, tmp_path: Path) -> None:
        _write(tmp_path, "shout.py", _VALID_PLUGIN_SRC)
        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path, entry_points=False)
        assert names == ["shout.Shout"]

    def test_local_plugin_hooks_fire(self, tmp_path: Path) -> None:
        _write(tmp_path, "shout.py", _VALID_PLUGIN_SRC)
        pm = PluginManager()
        pm.discover_and_load(local_dir=tmp_path, entry_points=False)
        (impl,) = pm.hook_impls("post_render")
        assert pm.invoke(impl, site=None, document=None, html="<p>hi</p>") == "<P>HI</P>"

    def test_syntax_error_warns_and_skips(self, tmp_path: Path) -> None:
        _write(tmp_path, "broken.py", _SYNTAX_ERROR_SRC)
        pm = PluginManager()
        names = pm.discover_and_load(local_dir=tmp_path, entry_points=False)
        assert names == []
        assert len(pm.warnings) == 1
        assert pm.warnings[0].startswith("Failed to load local plugin broken.py:")

    def test_instantiation_failure_warns(self, tmp_path: Path) -> None:
        _write(tmp_path, "needs.py", _FAILING_INIT_SRC)
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []
        assert pm.warnings[0].startswith("Failed to instantiate plugin NeedsArgs from needs.py:")

    def test_skips_underscore_prefixed_files(self, tmp_path: Path) -> None:
        _write(tmp_path, "_helpers.py", _VALID_PLUGIN_SRC)
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []

    def test_skips_classes_without_hookimpls(self, tmp_path: Path) -> None:
        _write(tmp_path, "plain.py", _NO_HOOKS_SRC)
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path, entry_points=False) == []
        assert pm.warnings == []

    def test_nonexistent_dir_is_noop(self, tmp_path: Path) -> None:
        pm = PluginManager()
        assert pm.discover_and_load(local_dir=tmp_path / "missing", entry_points=False) == []

    def test_has_hook_impls(self) -> None:
        class _WithHook:
            @hookimpl
            def post_render(self, html: str) -> str:
                return html

        class _NoHook:
            def post_render(self, html: str) -> str:
                return html

        assert PluginManager._has_hook_impls(_WithHook) is True
        assert PluginManager._has_hook_impls(_NoHook) is False
