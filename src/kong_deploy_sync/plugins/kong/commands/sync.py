"""CLI commands that push a deploy config to Kong.

- create-services: register services that are not in Kong yet
- update-service: upsert one service's plugins and routes, then prune
- delete-service: remove one service and its routes
- sync: upsert every configured service, optionally pruning
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog
import typer
import yaml
from pydantic import ValidationError
from rich.markup import escape

from kong_deploy_sync.integrations.kong.config import KongSyncConfig
from kong_deploy_sync.integrations.kong.credentials import load_credentials
from kong_deploy_sync.integrations.kong.exceptions import KongSyncError
from kong_deploy_sync.integrations.serverless.loader import load_serverless_config
from kong_deploy_sync.plugins.kong.commands.base import (
    ConfigFileOption,
    ForceOption,
    ProfileOption,
    RequiredServiceNameOption,
    ServiceNameOption,
    console,
    handle_config_error,
    handle_kong_error,
    print_sync_report,
    prompt_confirm,
)
from kong_deploy_sync.services.kong import reconciler
from kong_deploy_sync.services.kong.gateway import KongGateway
from kong_deploy_sync.services.kong.projector import list_desired_services

if TYPE_CHECKING:
    from kong_deploy_sync.integrations.kong.client import KongAdminClient
    from kong_deploy_sync.integrations.kong.models.desired import DesiredService
    from kong_deploy_sync.integrations.serverless.models import ServerlessConfig

logger = structlog.get_logger()

ClientFactory = Callable[[KongSyncConfig], "KongAdminClient"]


@dataclass
class SyncContext:
    """Everything a command needs once the configuration is resolved."""

    config: KongSyncConfig
    deploy_config: ServerlessConfig
    config_file: str


def resolve_context(config_file: str | None, profile: str | None) -> SyncContext:
    """Load the deploy config and credentials and build the run configuration.

    Command-line values win over ``KONG_SYNC_*`` variables, which win over
    the built-in defaults.

    Raises:
        typer.Exit: If the deploy config, credentials or settings are invalid.
    """
    try:
        defaults = KongSyncConfig.from_env()
    except ValidationError as e:
        handle_config_error("KONG_SYNC_* environment variables", e)
    path = config_file or defaults.config_file
    profile = profile or defaults.profile

    try:
        deploy_config = load_serverless_config(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        handle_config_error(path, e)

    try:
        credentials = load_credentials(profile)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e

    try:
        config = KongSyncConfig.from_env(
            admin_api_url=deploy_config.custom.kong.admin_api_url,
            credentials=credentials,
        )
    except ValidationError as e:
        handle_config_error(f"{path} (credentials profile '{profile}')", e)
    logger.debug(
        "Resolved sync configuration",
        config_file=path,
        profile=profile,
        base_url=config.connection.base_url,
    )
    return SyncContext(config=config, deploy_config=deploy_config, config_file=path)


def _desired_services(ctx: SyncContext, service_name: str | None) -> list[DesiredService]:
    try:
        return list_desired_services(
            ctx.deploy_config,
            service_name,
            default_upstream_url=ctx.config.default_upstream_url,
        )
    except ValidationError as e:
        handle_config_error(ctx.config_file, e)


def register_sync_commands(app: typer.Typer, get_client: ClientFactory) -> None:
    """Register the sync commands on the ``kong`` sub-app.

    Args:
        app: Typer app to register commands with.
        get_client: Builds an Admin API client for a resolved configuration.
    """

    @app.command("create-services")
    def create_services(
        service: ServiceNameOption = None,
        config_file: ConfigFileOption = None,
        profile: ProfileOption = None,
    ) -> None:
        """Register configured services that are not in Kong yet.

        Existing services are left untouched.

        Examples:
            kong-sync kong create-services
            kong-sync kong create-services --service users
        """
        ctx = resolve_context(config_file, profile)
        services = _desired_services(ctx, service)
        if not services:
            console.print("[yellow]No services configured to register.[/yellow]")
            return

        try:
            with get_client(ctx.config) as client:
                report = reconciler.create_services(services, KongGateway.from_client(client))
        except KongSyncError as e:
            handle_kong_error(e)

        print_sync_report(report, title="Registered services")

    @app.command("update-service")
    def update_service(
        service: RequiredServiceNameOption,
        config_file: ConfigFileOption = None,
        profile: ProfileOption = None,
    ) -> None:
        """Update one service's plugins and routes and prune the rest.

        Plugins and routes that are no longer in the deploy config are
        deleted. Asks for confirmation first.

        Examples:
            kong-sync kong update-service --service users
        """
        ctx = resolve_context(config_file, profile)
        services = _desired_services(ctx, service)
        if not services:
            console.print(
                f"[red]Error:[/red] Service '{escape(service)}' is not in the deploy config"
            )
            raise typer.Exit(1)

        try:
            with get_client(ctx.config) as client:
                report = reconciler.update_service(
                    services[0], KongGateway.from_client(client), prompt_confirm
                )
        except KongSyncError as e:
            handle_kong_error(e)

        if report is None:
            console.print("Update cancelled")
            return
        print_sync_report(report, title=f"Updated service '{escape(service)}'")

    @app.command("delete-service")
    def delete_service(
        service: RequiredServiceNameOption,
        config_file: ConfigFileOption = None,
        profile: ProfileOption = None,
    ) -> None:
        """Remove a service and all of its routes from Kong.

        Asks for confirmation first.

        Examples:
            kong-sync kong delete-service --service users
        """
        ctx = resolve_context(config_file, profile)
        try:
            with get_client(ctx.config) as client:
                report = reconciler.delete_service(
                    service, KongGateway.from_client(client), prompt_confirm
                )
        except KongSyncError as e:
            handle_kong_error(e)

        if report is None:
            console.print("Delete cancelled")
            return
        print_sync_report(report, title=f"Removed service '{escape(service)}'")

    @app.command("sync")
    def sync(
        service: ServiceNameOption = None,
        config_file: ConfigFileOption = None,
        profile: ProfileOption = None,
        prune: bool = typer.Option(
            False,
            "--prune",
            help="Delete plugins and routes that are no longer configured",
        ),
        force: ForceOption = False,
    ) -> None:
        """Create or update every configured service.

        With --prune, plugins and routes missing from the deploy config are
        deleted as well; that asks for confirmation unless --force is given.

        Examples:
            kong-sync kong sync
            kong-sync kong sync --prune --force
        """
        ctx = resolve_context(config_file, profile)
        services = _desired_services(ctx, service)
        if not services:
            console.print("[yellow]No services configured to sync.[/yellow]")
            return

        if prune and not force:
            names = ", ".join(desired.name for desired in services)
            answer = prompt_confirm(
                f"Stale plugins and routes of {names} will be deleted.\n"
                f'Enter "{reconciler.CONFIRM_ANSWER}" to continue: '
            )
            if answer != reconciler.CONFIRM_ANSWER:
                console.print("Sync cancelled")
                return

        try:
            with get_client(ctx.config) as client:
                report = reconciler.reconcile_services(
                    services, KongGateway.from_client(client), prune=prune
                )
        except KongSyncError as e:
            handle_kong_error(e)

        print_sync_report(report)
