"""Serverless deploy config - the declarative source of desired Kong state."""

from kong_deploy_sync.integrations.serverless.loader import load_serverless_config
from kong_deploy_sync.integrations.serverless.models import (
    FunctionSpec,
    KongCustomSection,
    KongRouteSpec,
    KongServiceSpec,
    ServerlessConfig,
)

__all__ = [
    "FunctionSpec",
    "KongCustomSection",
    "KongRouteSpec",
    "KongServiceSpec",
    "ServerlessConfig",
    "load_serverless_config",
]
