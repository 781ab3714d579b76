"""Plugin system for kong_deploy_sync."""

from kong_deploy_sync.core.plugins.base import Plugin, hookimpl, hookspec
from kong_deploy_sync.core.plugins.manager import PluginManager

__all__ = ["Plugin", "PluginManager", "hookimpl", "hookspec"]
