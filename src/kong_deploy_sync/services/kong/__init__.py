"""Kong Gateway service layer - the gateway client and the sync logic.

Entity managers implement single Admin API operations using the Repository
pattern. The reconciler and projector build on them to bring Kong in line
with a declarative deploy config.
"""

from kong_deploy_sync.services.kong.base import BaseEntityManager
from kong_deploy_sync.services.kong.gateway import KongGateway
from kong_deploy_sync.services.kong.plugin_manager import KongPluginManager
from kong_deploy_sync.services.kong.projector import (
    ProjectedRoute,
    build_route_config,
    get_configuration_by_function_name,
    list_desired_services,
)
from kong_deploy_sync.services.kong.reconciler import (
    create_services,
    delete_service,
    reconcile_service,
    reconcile_services,
    update_service,
)
from kong_deploy_sync.services.kong.route_identity import route_key, same_route
from kong_deploy_sync.services.kong.route_manager import RouteManager
from kong_deploy_sync.services.kong.service_manager import ServiceManager

__all__ = [
    "BaseEntityManager",
    "KongGateway",
    "KongPluginManager",
    "ProjectedRoute",
    "RouteManager",
    "ServiceManager",
    "build_route_config",
    "create_services",
    "delete_service",
    "get_configuration_by_function_name",
    "list_desired_services",
    "reconcile_service",
    "reconcile_services",
    "route_key",
    "same_route",
    "update_service",
]
