"""Shared CLI output helpers.

Usage:
    from kong_deploy_sync.cli.output import Table

    table = Table(title="Sync summary")
    table.add_column("Entity", style="cyan")
    table.add_row("service")
    console.print(table)
"""

from kong_deploy_sync.cli.output.table import Table

__all__ = ["Table"]
