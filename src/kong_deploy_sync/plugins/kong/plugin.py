"""Kong deploy-sync plugin.

Adds the ``kong`` command group, which pushes the Kong resources declared
in a deploy config to a Kong Admin API.
"""

from __future__ import annotations

import structlog
import typer

from kong_deploy_sync import __version__
from kong_deploy_sync.core.plugins.base import Plugin, hookimpl
from kong_deploy_sync.integrations.kong.client import KongAdminClient
from kong_deploy_sync.integrations.kong.config import KongSyncConfig
from kong_deploy_sync.plugins.kong.commands.sync import register_sync_commands

logger = structlog.get_logger()


class KongSyncPlugin(Plugin):
    """Kong deploy-sync integration plugin."""

    name = "kong"
    version = __version__
    description = "Register, update and remove Kong services from a deploy config"

    @staticmethod
    def create_client(config: KongSyncConfig) -> KongAdminClient:
        """Build an Admin API client for a resolved configuration."""
        logger.debug(
            "Creating Kong Admin API client",
            base_url=config.connection.base_url,
            auth_type=config.auth.type,
        )
        return KongAdminClient(
            connection_config=config.connection,
            auth_config=config.auth,
        )

    @hookimpl
    def register_commands(self, app: typer.Typer) -> None:
        """Register the ``kong`` command group with the CLI."""
        kong_app = typer.Typer(
            name="kong",
            help="Sync Kong services, routes and plugins with a deploy config",
            no_args_is_help=True,
        )
        register_sync_commands(kong_app, self.create_client)
        app.add_typer(kong_app, name="kong")

        logger.debug("Kong commands registered")
