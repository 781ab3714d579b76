"""Version information for kong_deploy_sync."""

__version__ = "0.1.0"
