"""Plugin base class and the pluggy hook specification."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    import typer

PROJECT_NAME = "kong_deploy_sync"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class _PluginSpec:
    """Hooks a command plugin implements."""

    @hookspec
    def register_commands(self, app: typer.Typer) -> None:
        """Attach the plugin's command group to the CLI.

        Args:
            app: The root Typer application.
        """


class Plugin:
    """Base class for command plugins.

    Subclasses set ``name`` and ``version`` and override
    ``register_commands``. Settings a plugin needs are resolved by its
    commands at run time, not handed over at registration.
    """

    name: str = "base"
    version: str = "0.0.0"
    description: str = ""

    def __init__(self) -> None:
        if self.name == "base":
            raise ValueError(f"{self.__class__.__name__} must define 'name' class attribute")
        if self.version == "0.0.0":
            raise ValueError(f"{self.__class__.__name__} must define 'version' class attribute")

    @hookimpl
    def register_commands(self, app: typer.Typer) -> None:
        """Register CLI commands. Override in subclasses."""
