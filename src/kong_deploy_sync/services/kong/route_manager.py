"""Route manager for Kong Routes.

This module provides the RouteManager class for managing Kong Route
entities through the Admin API.
"""

from __future__ import annotations

from kong_deploy_sync.integrations.kong.exceptions import (
    KongNotFoundError,
    KongValidationError,
)
from kong_deploy_sync.integrations.kong.models.base import KongEntityReference
from kong_deploy_sync.integrations.kong.models.route import Route
from kong_deploy_sync.services.kong.base import BaseEntityManager
from kong_deploy_sync.services.kong.route_identity import route_key


class RouteManager(BaseEntityManager[Route]):
    """Manager for Kong Route entities.

    Routes are created through ``POST /routes`` with the owning service
    embedded by id, and looked up within a service by their derived key.

    Example:
        >>> manager = RouteManager(client)
        >>> route = manager.get_by_config("users", Route(paths=["/users"]))
        >>> if route is None:
        ...     route = manager.create("users", Route(paths=["/users"]))
    """

    _endpoint = "routes"
    _entity_name = "route"
    _model_class = Route

    @staticmethod
    def _validate_route_config(route_config: Route | None) -> Route:
        if route_config is None:
            raise KongValidationError.missing("routeConfig")
        if not route_config.has_match_criteria:
            raise KongValidationError(
                "Route requires at least one of hosts, paths or methods.",
                field="routeConfig",
            )
        return route_config

    def get(self, id_or_name: str) -> Route | None:
        """Get a route by ID; None when it does not exist."""
        self._require(id_or_name, "routeId")
        return super().get(id_or_name)

    def list_by_service(self, service_name: str) -> list[Route]:
        """List every route attached to a service.

        Args:
            service_name: Service name or ID.

        Returns:
            All routes of the service (empty if the service does not exist).
        """
        self._require(service_name, "serviceName")
        self._log.debug("listing_service_routes", service=service_name)
        return self._list_all(f"services/{service_name}/routes")

    def get_by_config(self, service_name: str, route_config: Route) -> Route | None:
        """Find the route of a service whose derived key matches ``route_config``.

        Args:
            service_name: Service name or ID.
            route_config: Desired route fields.

        Returns:
            The first matching remote route, or None.
        """
        self._require(service_name, "serviceName")
        self._require(route_config, "routeConfig")
        wanted = route_key(route_config)
        for route in self.list_by_service(service_name):
            if route_key(route) == wanted:
                self._log.debug("matched_route", service=service_name, id=route.id, key=wanted)
                return route
        return None

    def create(self, service_name: str, route_config: Route) -> Route:
        """Create a route for a service.

        Args:
            service_name: Name of the owning service.
            route_config: Route fields; needs at least one match criterion.

        Returns:
            The created route, including its Kong-assigned id.

        Raises:
            KongValidationError: If an argument is missing or the route has
                no match criteria (raised before any request).
            KongNotFoundError: If the service does not exist.
        """
        self._require(service_name, "serviceName")
        route_config = self._validate_route_config(route_config)

        service = self._client.get(f"services/{service_name}")
        if not service.found:
            raise KongNotFoundError(
                resource_type="service",
                resource_id=service_name,
                endpoint=f"/services/{service_name}",
            )

        route = route_config.model_copy(
            update={"service": KongEntityReference.from_id(service.result["id"])}
        )
        payload = route.to_create_payload()
        self._log.info("creating_entity", service_name=service_name, payload=payload)
        response = self._client.post(self._endpoint, json=payload)
        created = self._to_model(response)
        self._log.info("created_entity", id=created.id, service=service_name)
        return created

    def update(self, route_id: str, route_config: Route) -> Route:
        """Update a route in place (PATCH).

        Args:
            route_id: Kong id of the route, taken from a probe or create.
            route_config: Route fields; needs at least one match criterion.

        Returns:
            The updated route.

        Raises:
            KongValidationError: If an argument is missing or the route has
                no match criteria (raised before any request).
        """
        self._require(route_id, "routeId")
        route_config = self._validate_route_config(route_config)

        payload = route_config.to_update_payload()
        self._log.info("updating_entity", id_or_name=route_id, payload=payload)
        response = self._client.patch(f"{self._endpoint}/{route_id}", json=payload)
        updated = self._to_model(response)
        self._log.info("updated_entity", id=updated.id)
        return updated

    def delete(self, id_or_name: str) -> None:
        """Delete a route by ID."""
        self._require(id_or_name, "routeId")
        super().delete(id_or_name)
