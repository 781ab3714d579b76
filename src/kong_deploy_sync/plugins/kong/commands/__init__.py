"""Kong sync CLI commands."""

from kong_deploy_sync.plugins.kong.commands.base import (
    ConfigFileOption,
    ForceOption,
    ProfileOption,
    ServiceNameOption,
    console,
    handle_kong_error,
    print_sync_report,
    prompt_confirm,
)
from kong_deploy_sync.plugins.kong.commands.sync import register_sync_commands

__all__ = [
    "ConfigFileOption",
    "ForceOption",
    "ProfileOption",
    "ServiceNameOption",
    "console",
    "handle_kong_error",
    "print_sync_report",
    "prompt_confirm",
    "register_sync_commands",
]
