"""Logging configuration for kong_deploy_sync."""

from kong_deploy_sync.logging.config import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
