"""Plugin registry for the canvas session hooks.

Loads :class:`BasePlugin` subclasses from a plugin directory, keeps them
by name, and fans session events out to them.  A plugin that raises is
logged and skipped; the session mutation that triggered it still stands.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from app.models.session import CanvasSnapshot
from app.plugins.base_plugin import BasePlugin, PluginContext
from app.plugins.hooks import HOOK_ACTIVATE, HOOK_DEACTIVATE

logger = logging.getLogger(__name__)


def _load_package(package_dir: Path) -> ModuleType | None:
    """Import ``package_dir/__init__.py`` as ``plugins.<dir name>``."""
    init_file = package_dir / "__init__.py"
    if not init_file.exists():
        return None

    module_name = f"plugins.{package_dir.name}"
    spec = importlib.util.spec_from_file_location(module_name, str(init_file))
    if spec is None or spec.loader is None:
        logger.warning("Could not create module spec for %s", package_dir.name)
        return None

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


class PluginRegistry:
    """Holds registered plugins and dispatches hooks to them."""

    def __init__(self) -> None:
        self._plugins: dict[str, BasePlugin] = {}

    def discover_plugins(self, plugin_dir: Path) -> list[str]:
        """Register every plugin class found in the packages under *plugin_dir*.

        Returns the names of the plugins that were registered.
        """
        if not plugin_dir.is_dir():
            return []

        discovered: list[str] = []
        for child in sorted(p for p in plugin_dir.iterdir() if p.is_dir()):
            try:
                module = _load_package(child)
                if module is None:
                    continue
                for _attr_name, plugin_cls in inspect.getmembers(module, inspect.isclass):
                    if issubclass(plugin_cls, BasePlugin) and not inspect.isabstract(plugin_cls):
                        plugin = plugin_cls()
                        self.register_plugin(plugin)
                        discovered.append(plugin.name)
                        logger.info("Discovered plugin: %s", plugin.name)
            except Exception:
                logger.exception("Failed to load plugin from %s", child.name)

        return discovered

    def register_plugin(self, plugin: BasePlugin) -> None:
        """Register *plugin* and call its activation hook."""
        self._plugins[plugin.name] = plugin
        self._call(plugin, HOOK_ACTIVATE)

    def trigger_hook(self, hook_name: str, **kwargs: Any) -> list[Any]:
        """Call *hook_name* on each plugin in registration order.

        Returns the values of the calls that succeeded.
        """
        results: list[Any] = []
        for plugin in self._plugins.values():
            ok, result = self._call(plugin, hook_name, **kwargs)
            if ok:
                results.append(result)
        return results

    def notify(
        self, hook_name: str, snapshot: CanvasSnapshot, **kwargs: Any
    ) -> list[Any]:
        """Trigger a session hook with a :class:`PluginContext` for *snapshot*."""
        if not self._plugins:
            return []
        context = PluginContext(snapshot=snapshot)
        return self.trigger_hook(hook_name, context=context, **kwargs)

    def get_plugin(self, name: str) -> BasePlugin | None:
        """Return a registered plugin by *name*, or ``None``."""
        return self._plugins.get(name)

    def list_plugins(self) -> list[str]:
        """Return the names of all registered plugins."""
        return list(self._plugins)

    def shutdown(self) -> None:
        """Call the deactivation hook on every plugin."""
        for plugin in self._plugins.values():
            self._call(plugin, HOOK_DEACTIVATE)

    @staticmethod
    def _call(plugin: BasePlugin, hook_name: str, **kwargs: Any) -> tuple[bool, Any]:
        method = getattr(plugin, hook_name, None)
        if method is None:
            return False, None
        try:
            return True, method(**kwargs)
        except Exception:
            logger.exception("Plugin %s raised in hook %s", plugin.name, hook_name)
            return False, None
