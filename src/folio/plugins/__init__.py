"""Extension layer: plugin system via pluggy.

Discovery: built-ins by name, entry_points (pip-installed), and local
``_plugins/*.py`` files.
INVARIANT: Plugin failures are warnings, never errors.
"""

from folio.plugins.hookspecs import hookimpl
from folio.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
