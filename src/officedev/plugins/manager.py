"""Plugin discovery and loading.

Discovery goes through pluggy's setuptools entry points in the
``officedev.plugins`` group. Plugins may also be registered directly.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from officedev.plugins.hookspecs import OfficedevHookSpec

PROJECT_NAME = "officedev"
ENTRY_POINT_GROUP = "officedev.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, device-kind registration and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(OfficedevHookSpec)
        self._loaded = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and collect their device kinds.

        Returns the names of all registered plugins.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        for plugin in list(self._pm.get_plugins()):
            if inspect.isclass(plugin):
                # Entry points may name the class; hooks need an instance.
                name = self._pm.get_name(plugin) or plugin.__name__
                self._pm.unregister(plugin)
                self._pm.register(plugin(), name=name)
        for plugin in self._pm.get_plugins():
            self._register_device_kinds(plugin)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved)
        if self._loaded:
            self._register_device_kinds(plugin)
        logger.debug("Registered plugin: %s", resolved)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _register_device_kinds(self, plugin: object) -> None:
        """Add one plugin's device kinds to the catalog.

        A broken plugin is logged and skipped; it never blocks startup.
        """
        from officedev.registry import register_device_kind

        hook = getattr(plugin, "register_device_kinds", None)
        if hook is None:
            return
        plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
        try:
            kinds = hook()
        except Exception:
            logger.warning("Failed to collect device kinds from %s", plugin_name, exc_info=True)
            return
        if not kinds:
            return
        if not isinstance(kinds, dict):
            logger.warning("Plugin %s returned non-dict device kinds", plugin_name)
            return
        for kind, device_cls in kinds.items():
            try:
                register_device_kind(kind, device_cls)
            except ValueError as exc:
                logger.warning("Plugin %s: %s", plugin_name, exc)
            else:
                logger.debug("Plugin %s registered device kind %s", plugin_name, kind)
