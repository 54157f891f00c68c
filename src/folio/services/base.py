"""BaseService: shared foundation for all folio services.

Every service receives a :class:`Site` at construction time. The Site
provides content loading, templates, plugins, and tracked source writes
via ``self._site.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from folio.infrastructure.site import Site


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class CreateService(BaseService):
            def create_post(self, title: str, ...) -> ServiceResult:
                with self._site.transaction() as txn:
                    ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    def _dispatch(self, hook_name: str, warnings: list[str], **kwargs: Any) -> list[tuple[str, Any]]:
        """Call every plugin implementing *hook_name*.

        INVARIANT: Plugin failures are warnings, never errors.

        Returns ``(plugin_name, result)`` for each plugin that succeeded.
        """
        pm = self._site.plugin_manager
        results, failures = pm.call_each(hook_name, **kwargs)
        warnings.extend(failures)
        return results

    def _plugin_warnings(self) -> list[str]:
        """Warnings collected while loading plugins (unknown names, bad files)."""
        return list(self._site.plugin_manager.warnings)
