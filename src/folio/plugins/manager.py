"""Plugin discovery and loading.

Discovery order:

1. Built-ins named in ``[plugins] enabled`` (``sitemap``, ``robots``, ``feed``).
2. ``folio.plugins`` entry points (pip-installed) via pluggy.
3. Single-file plugins in the site's ``_plugins/`` directory.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pluggy
from pluggy import HookImpl

from folio.plugins.hookspecs import FolioHookSpec

PROJECT_NAME = "folio"
ENTRY_POINT_GROUP = "folio.plugins"

logger = logging.getLogger(__name__)


def _builtin_factories() -> dict[str, Callable[[], object]]:
    from folio.plugins.builtins.feed import FeedPlugin
    from folio.plugins.builtins.robots import RobotsPlugin
    from folio.plugins.builtins.sitemap import SitemapPlugin

    return {"sitemap": SitemapPlugin, "robots": RobotsPlugin, "feed": FeedPlugin}


BUILTIN_PLUGINS: tuple[str, ...] = ("sitemap", "robots", "feed")


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FolioHookSpec)
        self.warnings: list[str] = []

    def discover_and_load(
        self,
        *,
        builtins: Iterable[str] = (),
        local_dir: Path | None = None,
        entry_points: bool = True,
    ) -> list[str]:
        """Register built-ins, entry-point plugins, and local plugins.

        Unknown built-in names and broken local plugins are recorded in
        :attr:`warnings` and skipped.

        Returns a list of loaded plugin names.
        """
        factories = _builtin_factories()
        for name in builtins:
            factory = factories.get(name)
            if factory is None:
                self._warn(f"Unknown built-in plugin: {name!r}")
                continue
            self.register_plugin(factory(), name=name)

        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        if local_dir is not None:
            self._discover_local(local_dir)
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def has_plugin(self, name: str) -> bool:
        return self._pm.has_plugin(name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return sorted(self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins())

    def hook_impls(self, hook_name: str) -> list[HookImpl]:
        """Return the implementations of *hook_name* in call order (LIFO)."""
        caller = getattr(self._pm.hook, hook_name)
        return list(reversed(caller.get_hookimpls()))

    @staticmethod
    def invoke(impl: HookImpl, **kwargs: Any) -> Any:
        """Call one implementation with the arguments it declares."""
        return impl.function(**{k: kwargs[k] for k in impl.argnames if k in kwargs})

    def call_each(self, hook_name: str, **kwargs: Any) -> tuple[list[tuple[str, Any]], list[str]]:
        """Call every implementation of *hook_name* independently.

        A plugin that raises does not stop the others; its failure is
        returned as a warning message.

        Returns:
            ``([(plugin_name, result), ...], [warning, ...])``
        """
        results: list[tuple[str, Any]] = []
        failures: list[str] = []
        for impl in self.hook_impls(hook_name):
            try:
                results.append((impl.plugin_name, self.invoke(impl, **kwargs)))
            except Exception as exc:
                message = f"Plugin {impl.plugin_name} failed in {hook_name}: {exc}"
                logger.warning(message)
                failures.append(message)
        return results, failures

    # ------------------------------------------------------------------
    # Local directory discovery
    # ------------------------------------------------------------------

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _discover_local(self, local_dir: Path) -> None:
        """Scan *local_dir* for single-file Python plugins.

        Each ``*.py`` file (excluding ``_``-prefixed names) is loaded as a
        module. Classes defined in the module that carry ``@hookimpl``
        methods are instantiated and registered.
        """
        if not local_dir.is_dir():
            return

        for py_file in sorted(local_dir.glob("*.py")):
            if py_file.name.startswith("_"):
                continue
            module_name = f"folio_local_plugin_{py_file.stem}"
            try:
                spec = importlib.util.spec_from_file_location(module_name, py_file)
                if spec is None or spec.loader is None:
                    self._warn(f"Could not create module spec for {py_file.name}")
                    continue
                module = importlib.util.module_from_spec(spec)
                sys.modules[module_name] = module
                spec.loader.exec_module(module)
            except Exception as exc:
                self._warn(f"Failed to load local plugin {py_file.name}: {exc}")
                sys.modules.pop(module_name, None)
                continue

            for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
                if obj.__module__ != module_name:
                    continue
                if not self._has_hook_impls(obj):
                    continue
                try:
                    self.register_plugin(obj(), name=f"{py_file.stem}.{obj.__name__}")
                except Exception as exc:
                    self._warn(f"Failed to instantiate plugin {obj.__name__} from {py_file.name}: {exc}")

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry points may name a class; hooks dispatched against the class
        object would leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin) or not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception as exc:
                self._warn(f"Failed to instantiate entry-point plugin {plugin_name}: {exc}")
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("folio")`` sets a ``folio_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "folio_impl", None):
                return True
        return False
