"""Main CLI entry point using Typer."""

from __future__ import annotations

import typer
from rich.console import Console

from kong_deploy_sync import __version__
from kong_deploy_sync.core.plugins import PluginManager
from kong_deploy_sync.logging.config import configure_logging
from kong_deploy_sync.plugins.kong.plugin import KongSyncPlugin

console = Console()

BUILTIN_PLUGINS = (KongSyncPlugin,)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"kong-sync version {__version__}")
        raise typer.Exit()


def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug mode.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Write console logs as JSON.",
    ),
) -> None:
    """Kong deploy sync - keep Kong in line with your deploy config."""
    configure_logging(verbose=verbose, debug=debug, json_output=json_logs)


def create_app(plugin_manager: PluginManager | None = None) -> typer.Typer:
    """Build the CLI with every built-in and installed plugin's commands."""
    app = typer.Typer(
        name="kong-sync",
        help="Sync Kong Gateway services, routes and plugins with a deploy config.",
        add_completion=True,
        no_args_is_help=True,
    )
    app.callback()(main)

    plugin_manager = plugin_manager or PluginManager()
    for plugin_class in BUILTIN_PLUGINS:
        if plugin_manager.get_plugin(plugin_class.name) is None:
            plugin_manager.register(plugin_class())
    plugin_manager.load_entry_points()
    plugin_manager.register_commands(app)
    return app


app = create_app()


if __name__ == "__main__":
    app()
