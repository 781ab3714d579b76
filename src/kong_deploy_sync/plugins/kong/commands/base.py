"""Base utilities for Kong sync CLI commands.

Common Typer options, error reporting, the confirmation prompt and the
summary table shared by every command.
"""

from __future__ import annotations

from typing import Annotated, NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from kong_deploy_sync.cli.output import Table
from kong_deploy_sync.integrations.kong.exceptions import (
    KongAlreadyExistsError,
    KongAPIError,
    KongAuthError,
    KongConnectionError,
    KongDBLessWriteError,
    KongNotFoundError,
    KongSyncError,
    KongValidationError,
)
from kong_deploy_sync.integrations.kong.models.sync import SyncReport

# Shared console instance for all commands
console = Console()


# =============================================================================
# Common Typer Option Annotations
# =============================================================================

ServiceNameOption = Annotated[
    str | None,
    typer.Option(
        "--service",
        "-n",
        help="Name of the service as declared in the deploy config",
    ),
]

RequiredServiceNameOption = Annotated[
    str,
    typer.Option(
        "--service",
        "-n",
        help="Name of the service as declared in the deploy config",
    ),
]

ConfigFileOption = Annotated[
    str | None,
    typer.Option(
        "--config",
        "-c",
        help="Deploy config file (default: serverless.yml or KONG_SYNC_CONFIG_FILE)",
    ),
]

ProfileOption = Annotated[
    str | None,
    typer.Option(
        "--profile",
        "-p",
        help="Credentials profile (default: 'default' or KONG_SYNC_PROFILE)",
    ),
]

ForceOption = Annotated[
    bool,
    typer.Option(
        "--force",
        "-f",
        help="Skip confirmation prompts",
    ),
]


# =============================================================================
# Error Handling
# =============================================================================


def handle_kong_error(error: KongSyncError) -> NoReturn:
    """Report a sync error in a user-friendly way and exit.

    Args:
        error: The error that aborted the command.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, KongValidationError):
        console.print("[red]Error:[/red] Invalid input")
        console.print(f"  {escape(error.message)}")

    elif isinstance(error, KongConnectionError):
        console.print("[red]Error:[/red] Cannot connect to Kong Admin API")
        console.print(f"  {escape(error.message)}")
        if error.original_error:
            console.print(f"  Cause: {escape(str(error.original_error))}")
        console.print("\n[dim]Hint: Check that Kong is running and the URL is correct.[/dim]")

    elif isinstance(error, KongAuthError):
        console.print("[red]Error:[/red] Authentication failed")
        console.print(f"  {escape(error.message)}")
        console.print("\n[dim]Hint: Check the apiKey of your credentials profile.[/dim]")

    elif isinstance(error, KongNotFoundError):
        console.print(f"[red]Error:[/red] {escape(str(error.resource_type))} not found")
        if error.resource_id:
            console.print(
                f"  Could not find {escape(str(error.resource_type))} '{escape(error.resource_id)}'"
            )
        else:
            console.print(f"  {escape(error.message)}")

    elif isinstance(error, KongAlreadyExistsError):
        console.print(f"[red]Error:[/red] {escape(error.message)}")

    elif isinstance(error, KongDBLessWriteError):
        console.print("[red]Error:[/red] Kong is running in DB-less mode")
        console.print("  Write operations are not available via the Admin API.")

    elif isinstance(error, KongAPIError):
        console.print(f"[red]Error:[/red] {escape(error.message)}")
        if error.status_code:
            console.print(f"  HTTP Status: {error.status_code}")
        if error.endpoint:
            console.print(f"  Endpoint: {escape(error.endpoint)}")

    else:
        console.print(f"[red]Error:[/red] {escape(str(error))}")

    raise typer.Exit(1)


def handle_config_error(source: str, error: Exception) -> NoReturn:
    """Report an unreadable or invalid configuration and exit.

    Args:
        source: Where the configuration came from, usually the deploy config path.
        error: The error raised while reading or validating it.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    source = escape(source)
    if isinstance(error, FileNotFoundError):
        console.print(f"[red]Error:[/red] Deploy config not found: {source}")
    elif isinstance(error, ValidationError):
        console.print(f"[red]Error:[/red] Invalid configuration in {source}")
        for err in error.errors():
            location = ".".join(str(part) for part in err["loc"])
            console.print(f"    - {escape(location)}: {escape(err['msg'])}")
    else:
        console.print(f"[red]Error:[/red] Cannot read {source}: {escape(str(error))}")
    raise typer.Exit(1)


# =============================================================================
# Confirmation and Output
# =============================================================================


def prompt_confirm(message: str) -> str:
    """Ask the operator a free-form question and return the raw answer.

    Destructive commands proceed only on the literal answer ``YES``, so a
    yes/no ``typer.confirm`` is not enough here.
    """
    return typer.prompt(message, default="", show_default=False, prompt_suffix="")


def print_sync_report(report: SyncReport, title: str = "Kong sync summary") -> None:
    """Print the changes of a sync pass as a table."""
    if not report.changes:
        console.print("[dim]Nothing to do.[/dim]")
        return

    styles = {"create": "green", "update": "yellow", "delete": "red", "skip": "dim"}
    table = Table(title=title)
    table.add_column("Operation")
    table.add_column("Entity", style="cyan")
    table.add_column("Name or ID")
    table.add_column("Parent", style="dim")

    for change in report.changes:
        style = styles[change.operation]
        table.add_row(
            f"[{style}]{change.operation}[/{style}]",
            escape(change.entity_type),
            escape(change.id_or_name),
            escape(change.parent or "-"),
        )
    console.print(table)
