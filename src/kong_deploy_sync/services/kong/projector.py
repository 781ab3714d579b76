"""Project deploy-config declarations into desired Kong state.

Everything here is pure: no I/O, no gateway calls.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from kong_deploy_sync.integrations.kong.config import DEFAULT_UPSTREAM_URL
from kong_deploy_sync.integrations.kong.models.desired import DesiredRoute, DesiredService
from kong_deploy_sync.integrations.kong.models.plugin import KongPluginEntity
from kong_deploy_sync.integrations.kong.models.route import Route
from kong_deploy_sync.integrations.serverless.models import KongServiceSpec, ServerlessConfig

logger = structlog.get_logger()

# flat descriptor key -> gateway list field
_SINGLETON_FIELDS = (("host", "hosts"), ("path", "paths"), ("method", "methods"))


@dataclass(frozen=True)
class ProjectedRoute:
    """A flat descriptor split into its service reference and route.

    Attributes:
        service: Name of the service the route belongs to (None if unset).
        route: Route fields and plugins in gateway shape.
    """

    service: str | None
    route: DesiredRoute


def project_route_fields(descriptor: Mapping[str, Any]) -> dict[str, Any]:
    """Turn flat ``host``/``path``/``method`` keys into gateway lists.

    ``method`` is uppercased. Keys that are absent (or empty) stay absent;
    ``service`` and ``plugins`` are dropped; every other key is kept.

    Example:
        >>> project_route_fields({"service": "svc", "path": "/users", "method": "get"})
        {'paths': ['/users'], 'methods': ['GET']}
    """
    fields = {k: v for k, v in descriptor.items() if k not in ("service", "plugins")}
    for flat, gateway in _SINGLETON_FIELDS:
        value = fields.pop(flat, None)
        if value:
            fields[gateway] = [value.upper() if flat == "method" else value]
    return fields


def build_route_config(descriptor: Mapping[str, Any] | None) -> ProjectedRoute | None:
    """Project one flat route descriptor.

    Args:
        descriptor: ``{service, host?, path?, method?, plugins?, ...}``.

    Returns:
        The projected route, or None for an empty descriptor.
    """
    if not descriptor:
        return None

    plugins = [KongPluginEntity.model_validate(p) for p in descriptor.get("plugins") or []]
    route = DesiredRoute(
        config=Route.model_validate(project_route_fields(descriptor)),
        plugins=plugins,
    )
    return ProjectedRoute(service=descriptor.get("service"), route=route)


def _service_from_spec(spec: KongServiceSpec, default_upstream_url: str) -> DesiredService:
    return DesiredService(
        name=spec.name,
        url=spec.url or default_upstream_url,
        plugins=[KongPluginEntity.model_validate(p) for p in spec.plugins],
        routes=[
            DesiredRoute(
                config=Route.model_validate(route.config),
                plugins=[KongPluginEntity.model_validate(p) for p in route.plugins],
            )
            for route in spec.routes
        ],
    )


def get_configuration_by_function_name(
    config: ServerlessConfig,
    function_name: str,
) -> ProjectedRoute | None:
    """Return the projected ``kong`` event of a function, or None.

    Only the first ``kong`` event of the function is considered.
    """
    function = config.functions.get(function_name)
    if function is None or not function.kong_events:
        return None
    return build_route_config(function.kong_events[0])


def list_desired_services(
    config: ServerlessConfig,
    service_name: str | None = None,
    default_upstream_url: str = DEFAULT_UPSTREAM_URL,
) -> list[DesiredService]:
    """Collect the desired services of a deploy config.

    Services declared under ``custom.kong.services`` come first, in file
    order. Routes declared by function events are appended to the service
    they name; a service named only by function events is added with
    ``default_upstream_url``, in order of first appearance.

    Args:
        config: The loaded deploy config.
        service_name: Keep only the service with this name.
        default_upstream_url: Upstream URL for services without one.

    Returns:
        The ordered desired services (empty when nothing matches).
    """
    services: dict[str, DesiredService] = {}
    for spec in config.custom.kong.services:
        services[spec.name] = _service_from_spec(spec, default_upstream_url)

    for function_name, function in config.functions.items():
        for event in function.kong_events:
            projected = build_route_config(event)
            if projected is None:
                continue
            if not projected.service:
                logger.warning("Kong event without service ignored", function=function_name)
                continue
            desired = services.setdefault(
                projected.service,
                DesiredService(name=projected.service, url=default_upstream_url),
            )
            desired.routes.append(projected.route)

    result = list(services.values())
    if service_name is not None:
        result = [service for service in result if service.name == service_name]

    if not result:
        if service_name:
            logger.warning("No service configured with this name", service=service_name)
        else:
            logger.warning("No service configured to register")

    return result
