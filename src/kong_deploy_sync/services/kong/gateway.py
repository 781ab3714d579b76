"""Typed gateway facade handed to the reconciler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from kong_deploy_sync.services.kong.plugin_manager import KongPluginManager
from kong_deploy_sync.services.kong.route_manager import RouteManager
from kong_deploy_sync.services.kong.service_manager import ServiceManager

if TYPE_CHECKING:
    from kong_deploy_sync.integrations.kong.client import KongAdminClient


@dataclass(frozen=True)
class KongGateway:
    """One manager per entity kind, all sharing a single Admin API client.

    Attributes:
        services: Service operations.
        routes: Route operations.
        plugins: Plugin operations.
    """

    services: ServiceManager
    routes: RouteManager
    plugins: KongPluginManager

    @classmethod
    def from_client(cls, client: KongAdminClient) -> KongGateway:
        """Build the managers on top of ``client``."""
        return cls(
            services=ServiceManager(client),
            routes=RouteManager(client),
            plugins=KongPluginManager(client),
        )
