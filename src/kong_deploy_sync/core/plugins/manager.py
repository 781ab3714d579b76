"""Plugin manager for discovering, registering and driving plugins."""

from __future__ import annotations

import importlib.metadata
from typing import TYPE_CHECKING

import pluggy
import structlog

from kong_deploy_sync.core.plugins.base import PROJECT_NAME, Plugin, _PluginSpec

if TYPE_CHECKING:
    import typer

logger = structlog.get_logger()


class PluginManager:
    """Manages plugin discovery and registration.

    Plugins come from the ``kong_deploy_sync.plugins`` entry-point group or
    are handed to ``register`` directly.
    """

    NAMESPACE = f"{PROJECT_NAME}.plugins"

    def __init__(self) -> None:
        """Initialize the plugin manager."""
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(_PluginSpec)
        self._plugins: dict[str, Plugin] = {}

    def register(self, plugin: Plugin) -> None:
        """Register an already constructed plugin.

        Raises:
            ValueError: If a plugin with the same name is registered.
        """
        if plugin.name in self._plugins:
            raise ValueError(f"Plugin '{plugin.name}' is already registered")
        self._pm.register(plugin, name=plugin.name)
        self._plugins[plugin.name] = plugin
        logger.debug("Registered plugin", name=plugin.name, version=plugin.version)

    def load_entry_points(self) -> list[str]:
        """Load every plugin advertised in the entry-point group.

        A plugin that fails to import is logged and skipped so the remaining
        commands stay usable.

        Returns:
            Names of the plugins loaded by this call.
        """
        loaded: list[str] = []
        for ep in importlib.metadata.entry_points(group=self.NAMESPACE):
            if ep.name in self._plugins:
                logger.debug("Plugin already loaded", name=ep.name)
                continue
            try:
                plugin_class = ep.load()
                self.register(plugin_class())
            except Exception as e:
                logger.error("Failed to load plugin", name=ep.name, error=str(e))
                continue
            loaded.append(ep.name)
        return loaded

    def register_commands(self, app: typer.Typer) -> None:
        """Let every plugin attach its commands to ``app``."""
        self._pm.hook.register_commands(app=app)

    def get_plugin(self, name: str) -> Plugin | None:
        """Get a registered plugin by name."""
        return self._plugins.get(name)
