"""Reconcile desired Kong state with what the Admin API reports.

Every resource goes through the same decision: read it first, then create
it if absent or update it (by the id the read returned) if present. A
blind create with a fallback on conflict is never attempted, since Kong's
conflict errors differ between entity types.

All calls are made one at a time. Kong's Admin API has been seen to answer
500 when several writes to related resources (plugins of one service, for
instance) arrive concurrently, so collections are walked with plain loops.

The first error aborts the pass and propagates unchanged; changes already
committed stay in place. Each function returns a ``SyncReport`` listing the
changes it made, in order.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from kong_deploy_sync.integrations.kong.exceptions import (
    KongNotFoundError,
    KongValidationError,
)
from kong_deploy_sync.integrations.kong.models.desired import DesiredRoute, DesiredService
from kong_deploy_sync.integrations.kong.models.sync import SyncReport
from kong_deploy_sync.services.kong.route_identity import route_key

if TYPE_CHECKING:
    from kong_deploy_sync.integrations.kong.models.plugin import KongPluginEntity
    from kong_deploy_sync.integrations.kong.models.route import Route
    from kong_deploy_sync.services.kong.gateway import KongGateway

logger = structlog.get_logger()

Confirm = Callable[[str], str]
"""Asks the operator a question and returns the raw answer."""

CONFIRM_ANSWER = "YES"


def _require(value: object, field: str) -> None:
    if value is None or value == "":
        raise KongValidationError.missing(field)


# Upserts


def upsert_service_plugins(
    service_name: str,
    plugins: list[KongPluginEntity],
    gateway: KongGateway,
) -> SyncReport:
    """Create or update each plugin of a service, one after another."""
    _require(service_name, "serviceName")
    _require(plugins, "servicePlugins")

    report = SyncReport()
    for plugin in plugins:
        existing = gateway.plugins.get_by_name_for_service(service_name, plugin.name)
        if existing is None or not existing.id:
            logger.info("Creating service plugin", service=service_name, plugin=plugin.name)
            gateway.plugins.create_for_service(service_name, plugin)
            report.record("create", "plugin", plugin.name, parent=service_name)
        else:
            logger.info("Updating service plugin", service=service_name, plugin=plugin.name)
            gateway.plugins.update(existing.id, plugin)
            report.record("update", "plugin", plugin.name, parent=service_name)
    return report


def upsert_route(
    service_name: str,
    desired_route: DesiredRoute,
    gateway: KongGateway,
    report: SyncReport | None = None,
) -> Route:
    """Create or update one route of a service.

    The remote route is found by derived key. An existing route is updated
    through the id Kong reported for it.

    Args:
        service_name: Name of the owning service.
        desired_route: Route fields and plugins.
        gateway: Gateway facade.
        report: Report to record the change in, if any.

    Returns:
        The created or updated route, carrying its Kong id.
    """
    _require(service_name, "serviceName")
    _require(desired_route, "routeConfig")

    config = desired_route.config
    report = report if report is not None else SyncReport()
    existing = gateway.routes.get_by_config(service_name, config)

    if existing is None or not existing.id:
        logger.info("Creating route", service=service_name, route=config.describe())
        route = gateway.routes.create(service_name, config)
        report.record("create", "route", config.describe(), parent=service_name)
    else:
        logger.info("Updating route", service=service_name, route=config.describe())
        route = gateway.routes.update(existing.id, config)
        if not route.id:
            route = route.model_copy(update={"id": existing.id})
        report.record("update", "route", config.describe(), parent=service_name)
    return route


def upsert_route_plugins(
    route_id: str,
    plugins: list[KongPluginEntity],
    gateway: KongGateway,
) -> SyncReport:
    """Create or update each plugin of a route, one after another."""
    _require(route_id, "routeId")
    _require(plugins, "routePlugins")

    report = SyncReport()
    for plugin in plugins:
        existing = gateway.plugins.get_by_name_for_route(route_id, plugin.name)
        if existing is None or not existing.id:
            logger.info("Creating route plugin", route=route_id, plugin=plugin.name)
            gateway.plugins.create_for_route(route_id, plugin)
            report.record("create", "plugin", plugin.name, parent=route_id)
        else:
            logger.info("Updating route plugin", route=route_id, plugin=plugin.name)
            gateway.plugins.update(existing.id, plugin)
            report.record("update", "plugin", plugin.name, parent=route_id)
    return report


# Prune


def _plugins_missing_from(
    registered: list[KongPluginEntity],
    desired: list[KongPluginEntity],
) -> list[KongPluginEntity]:
    desired_names = {plugin.name for plugin in desired}
    return [plugin for plugin in registered if plugin.name not in desired_names]


def find_removed_service_plugins(
    service_name: str,
    plugins: list[KongPluginEntity],
    gateway: KongGateway,
) -> list[KongPluginEntity]:
    """Return the plugins attached to a service whose name is not desired.

    An empty ``plugins`` list selects every attached plugin.
    """
    _require(service_name, "serviceName")
    _require(plugins, "servicePlugins")
    return _plugins_missing_from(gateway.plugins.list_by_service(service_name), plugins)


def find_removed_route_plugins(
    route_id: str,
    plugins: list[KongPluginEntity],
    gateway: KongGateway,
) -> list[KongPluginEntity]:
    """Return the plugins attached to a route whose name is not desired.

    An empty ``plugins`` list selects every attached plugin.
    """
    _require(route_id, "routeId")
    _require(plugins, "routePlugins")
    return _plugins_missing_from(gateway.plugins.list_by_route(route_id), plugins)


def find_removed_routes(
    service_name: str,
    routes: list[Route],
    gateway: KongGateway,
) -> list[Route]:
    """Return the routes of a service whose derived key is not desired.

    An empty ``routes`` list selects every route of the service. Otherwise
    remote routes without hosts, paths or methods are never selected,
    because they cannot be compared.
    """
    _require(service_name, "serviceName")
    _require(routes, "configuredRoutes")

    registered = gateway.routes.list_by_service(service_name)
    if not routes:
        return registered

    desired_keys = {key for route in routes if (key := route_key(route))}
    return [
        route for route in registered if (key := route_key(route)) and key not in desired_keys
    ]


def remove_plugins(
    plugins: list[KongPluginEntity],
    gateway: KongGateway,
    parent: str | None = None,
) -> SyncReport:
    """Delete each plugin by id, one after another."""
    _require(plugins, "plugins")

    report = SyncReport()
    for plugin in plugins:
        _require(plugin.id, "pluginId")
        logger.info("Removing plugin", plugin=plugin.name, id=plugin.id, parent=parent)
        gateway.plugins.delete(plugin.id)
        report.record("delete", "plugin", plugin.name, parent=parent)
    return report


def remove_routes(
    routes: list[Route],
    gateway: KongGateway,
    parent: str | None = None,
) -> SyncReport:
    """Delete each route by id, one after another."""
    report = SyncReport()
    for route in routes or []:
        _require(route.id, "routeId")
        logger.info("Removing route", route=route.describe(), id=route.id, parent=parent)
        gateway.routes.delete(route.id)
        report.record("delete", "route", route.describe(), parent=parent)
    return report


# Service-level passes


def _apply_service(
    desired: DesiredService,
    gateway: KongGateway,
    *,
    exists: bool,
    prune: bool,
) -> SyncReport:
    """Apply one desired service whose existence has already been probed.

    Order: the service, its plugins, each route followed by that route's
    plugins, then (when pruning) service plugins, route plugins and routes
    that are no longer configured.
    """
    report = SyncReport()

    if exists:
        # Only the plugins and routes of an existing service are reconciled.
        report.record("update", "service", desired.name)
    else:
        logger.info("Creating service", service=desired.name, url=desired.url)
        gateway.services.create(desired.name, desired.url)
        report.record("create", "service", desired.name)

    report.extend(upsert_service_plugins(desired.name, desired.plugins, gateway))

    applied: list[tuple[str, list[KongPluginEntity]]] = []
    for desired_route in desired.routes:
        route_id = upsert_route(desired.name, desired_route, gateway, report).id
        if not route_id:
            raise KongValidationError.missing("routeId")
        report.extend(upsert_route_plugins(route_id, desired_route.plugins, gateway))
        applied.append((route_id, desired_route.plugins))

    if prune:
        removed = find_removed_service_plugins(desired.name, desired.plugins, gateway)
        report.extend(remove_plugins(removed, gateway, parent=desired.name))

        for route_id, plugins in applied:
            removed = find_removed_route_plugins(route_id, plugins, gateway)
            report.extend(remove_plugins(removed, gateway, parent=route_id))

        stale_routes = find_removed_routes(
            desired.name,
            [desired_route.config for desired_route in desired.routes],
            gateway,
        )
        report.extend(remove_routes(stale_routes, gateway, parent=desired.name))

    return report


def reconcile_service(
    desired: DesiredService,
    gateway: KongGateway,
    *,
    prune: bool = False,
) -> SyncReport:
    """Create or update a service with its plugins and routes.

    Args:
        desired: The desired service.
        gateway: Gateway facade.
        prune: Also delete plugins and routes that are no longer configured.

    Returns:
        Report of every change made.
    """
    _require(desired, "service")
    exists = gateway.services.exists(desired.name)
    return _apply_service(desired, gateway, exists=exists, prune=prune)


def reconcile_services(
    services: list[DesiredService],
    gateway: KongGateway,
    *,
    prune: bool = False,
) -> SyncReport:
    """Run ``reconcile_service`` for each service in order."""
    report = SyncReport()
    for desired in services:
        report.extend(reconcile_service(desired, gateway, prune=prune))
    return report


def create_services(services: list[DesiredService], gateway: KongGateway) -> SyncReport:
    """Register services that are not in Kong yet.

    Services that already exist are skipped untouched; nothing is pruned.

    Args:
        services: Desired services, in order.
        gateway: Gateway facade.

    Returns:
        Report of every change made, with a ``skip`` entry per existing service.
    """
    report = SyncReport()
    for desired in services:
        if gateway.services.exists(desired.name):
            logger.info("Service already exists", service=desired.name)
            report.record("skip", "service", desired.name)
            continue
        report.extend(_apply_service(desired, gateway, exists=False, prune=False))
    return report


def update_service(
    desired: DesiredService,
    gateway: KongGateway,
    confirm: Confirm,
) -> SyncReport | None:
    """Bring an existing service's plugins and routes in line with the config.

    After confirmation, plugins and routes are upserted and everything no
    longer configured is deleted.

    Args:
        desired: The desired service.
        gateway: Gateway facade.
        confirm: Prompt callback; only the answer ``YES`` proceeds.

    Returns:
        Report of every change made, or None if the operator declined.

    Raises:
        KongNotFoundError: If the service is not registered in Kong.
    """
    _require(desired, "service")
    if not gateway.services.exists(desired.name):
        raise KongNotFoundError(resource_type="service", resource_id=desired.name)

    answer = confirm(
        f'Do you want to update the service "{desired.name}"? \n'
        f'Enter "{CONFIRM_ANSWER}" to update: '
    )
    if answer != CONFIRM_ANSWER:
        logger.info("Update declined", service=desired.name)
        return None

    return _apply_service(desired, gateway, exists=True, prune=True)


def delete_service(
    service_name: str,
    gateway: KongGateway,
    confirm: Confirm,
) -> SyncReport | None:
    """Remove a service and all of its routes.

    Routes are deleted one at a time before the service itself; Kong drops
    the attached plugins with their owners.

    Args:
        service_name: Name of the service to remove.
        gateway: Gateway facade.
        confirm: Prompt callback; only the answer ``YES`` proceeds.

    Returns:
        Report of every change made, or None if the operator declined.

    Raises:
        KongNotFoundError: If the service is not registered in Kong.
    """
    _require(service_name, "serviceName")
    if gateway.services.get(service_name) is None:
        raise KongNotFoundError(resource_type="service", resource_id=service_name)

    answer = confirm(
        f'Do you want to remove this service "{service_name}"? THINK TWICE!\n'
        f'Enter "{CONFIRM_ANSWER}" to remove: '
    )
    if answer != CONFIRM_ANSWER:
        logger.info("Delete declined", service=service_name)
        return None

    report = remove_routes(gateway.routes.list_by_service(service_name), gateway, service_name)

    logger.info("Removing service", service=service_name)
    gateway.services.delete(service_name)
    report.record("delete", "service", service_name)
    return report
