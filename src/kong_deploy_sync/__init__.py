"""Kong deployment sync - keep Kong Gateway in step with declarative deploy config."""

from kong_deploy_sync.__version__ import __version__

__all__ = ["__version__"]
