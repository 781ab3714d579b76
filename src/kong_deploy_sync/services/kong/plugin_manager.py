"""Plugin manager for Kong Plugins.

This module provides the KongPluginManager class for attaching, looking up,
updating and removing plugins on Kong Services and Routes.
"""

from __future__ import annotations

from kong_deploy_sync.integrations.kong.exceptions import KongNotFoundError
from kong_deploy_sync.integrations.kong.models.plugin import KongPluginEntity
from kong_deploy_sync.services.kong.base import BaseEntityManager


class KongPluginManager(BaseEntityManager[KongPluginEntity]):
    """Manager for Kong Plugin entities.

    A plugin is identified by its attachment point plus its ``name``; when
    several instances of one plugin type share an attachment point the
    first one Kong lists wins.

    Note: Named KongPluginManager to avoid confusion with the CLI plugin system.

    Example:
        >>> manager = KongPluginManager(client)
        >>> plugin = KongPluginEntity(name="cors", config={"origins": ["*"]})
        >>> if manager.get_by_name_for_service("users", "cors") is None:
        ...     manager.create_for_service("users", plugin)
    """

    _endpoint = "plugins"
    _entity_name = "plugin"
    _model_class = KongPluginEntity

    def get(self, id_or_name: str) -> KongPluginEntity | None:
        """Get a plugin by ID; None when it does not exist."""
        self._require(id_or_name, "pluginId")
        return super().get(id_or_name)

    # Lookups

    def list_by_service(self, service_name: str) -> list[KongPluginEntity]:
        """List every plugin attached to a service.

        Args:
            service_name: Service name or ID.

        Returns:
            List of plugin entities.
        """
        self._require(service_name, "serviceName")
        self._log.debug("listing_service_plugins", service=service_name)
        return self._list_all(f"services/{service_name}/plugins")

    def list_by_route(self, route_id: str) -> list[KongPluginEntity]:
        """List every plugin attached to a route.

        Args:
            route_id: Route ID.

        Returns:
            List of plugin entities.
        """
        self._require(route_id, "routeId")
        self._log.debug("listing_route_plugins", route=route_id)
        return self._list_all(f"routes/{route_id}/plugins")

    @staticmethod
    def _find_by_name(
        plugins: list[KongPluginEntity],
        plugin_name: str,
    ) -> KongPluginEntity | None:
        return next((plugin for plugin in plugins if plugin.name == plugin_name), None)

    def get_by_name_for_service(
        self,
        service_name: str,
        plugin_name: str,
    ) -> KongPluginEntity | None:
        """Return the plugin named ``plugin_name`` on a service, or None."""
        self._require(service_name, "serviceName")
        self._require(plugin_name, "pluginName")
        return self._find_by_name(self.list_by_service(service_name), plugin_name)

    def get_by_name_for_route(
        self,
        route_id: str,
        plugin_name: str,
    ) -> KongPluginEntity | None:
        """Return the plugin named ``plugin_name`` on a route, or None."""
        self._require(route_id, "routeId")
        self._require(plugin_name, "pluginName")
        return self._find_by_name(self.list_by_route(route_id), plugin_name)

    def exists_for_service(self, service_name: str, plugin_name: str) -> bool:
        """Return True when a plugin of this name is attached to the service."""
        return self.get_by_name_for_service(service_name, plugin_name) is not None

    # Writes

    def create_for_service(
        self,
        service_name: str,
        plugin: KongPluginEntity,
    ) -> KongPluginEntity:
        """Attach a plugin to a service.

        Raises:
            KongValidationError: If an argument is missing.
            KongNotFoundError: If the service does not exist.
        """
        self._require(service_name, "serviceName")
        self._require(plugin, "pluginConfig")
        self._require_parent(f"services/{service_name}", "service", service_name)

        payload = plugin.to_create_payload()
        self._log.info("creating_service_plugin", service=service_name, name=plugin.name)
        response = self._client.post(f"services/{service_name}/plugins", json=payload)
        created = self._to_model(response)
        self._log.info("created_service_plugin", id=created.id, service=service_name)
        return created

    def create_for_route(
        self,
        route_id: str,
        plugin: KongPluginEntity,
    ) -> KongPluginEntity:
        """Attach a plugin to a route.

        Raises:
            KongValidationError: If an argument is missing.
            KongNotFoundError: If the route does not exist.
        """
        self._require(route_id, "routeId")
        self._require(plugin, "pluginConfig")
        self._require_parent(f"routes/{route_id}", "route", route_id)

        payload = plugin.to_create_payload()
        self._log.info("creating_route_plugin", route=route_id, name=plugin.name)
        response = self._client.post(f"routes/{route_id}/plugins", json=payload)
        created = self._to_model(response)
        self._log.info("created_route_plugin", id=created.id, route=route_id)
        return created

    def update(self, plugin_id: str, plugin: KongPluginEntity) -> KongPluginEntity:
        """Update a plugin in place (PATCH).

        Args:
            plugin_id: Kong id of the plugin, taken from a lookup.
            plugin: Desired plugin fields.

        Returns:
            The updated plugin.
        """
        self._require(plugin_id, "pluginId")
        self._require(plugin, "pluginConfig")

        payload = plugin.to_update_payload()
        self._log.info("updating_entity", id_or_name=plugin_id, name=plugin.name)
        response = self._client.patch(f"{self._endpoint}/{plugin_id}", json=payload)
        updated = self._to_model(response)
        self._log.info("updated_entity", id=updated.id)
        return updated

    def update_for_service(
        self,
        service_name: str,
        plugin: KongPluginEntity,
    ) -> KongPluginEntity:
        """Update the plugin of the same name already attached to a service.

        Raises:
            KongNotFoundError: If the service does not exist or has no
                plugin of this name.
        """
        self._require(service_name, "serviceName")
        self._require(plugin, "pluginConfig")
        self._require_parent(f"services/{service_name}", "service", service_name)

        existing = self.get_by_name_for_service(service_name, plugin.name)
        if existing is None or not existing.id:
            raise KongNotFoundError(
                message=f"plugin '{plugin.name}' is not attached to service '{service_name}'",
                endpoint=f"/services/{service_name}/plugins",
            )
        return self.update(existing.id, plugin)

    def update_for_route(
        self,
        route_id: str,
        plugin: KongPluginEntity,
    ) -> KongPluginEntity:
        """Update the plugin of the same name already attached to a route.

        Raises:
            KongNotFoundError: If the route does not exist or has no plugin
                of this name.
        """
        self._require(route_id, "routeId")
        self._require(plugin, "pluginConfig")
        self._require_parent(f"routes/{route_id}", "route", route_id)

        existing = self.get_by_name_for_route(route_id, plugin.name)
        if existing is None or not existing.id:
            raise KongNotFoundError(
                message=f"plugin '{plugin.name}' is not attached to route '{route_id}'",
                endpoint=f"/routes/{route_id}/plugins",
            )
        return self.update(existing.id, plugin)

    def delete(self, id_or_name: str) -> None:
        """Delete a plugin by ID."""
        self._require(id_or_name, "pluginId")
        super().delete(id_or_name)

    def delete_by_name_for_service(self, service_name: str, plugin_name: str) -> None:
        """Remove the plugin named ``plugin_name`` from a service.

        Raises:
            KongNotFoundError: If no plugin of this name is attached.
        """
        plugin = self.get_by_name_for_service(service_name, plugin_name)
        if plugin is None or not plugin.id:
            raise KongNotFoundError(
                message=f"plugin '{plugin_name}' is not attached to service '{service_name}'",
                endpoint=f"/services/{service_name}/plugins",
            )
        self.delete(plugin.id)

    def delete_by_name_for_route(self, route_id: str, plugin_name: str) -> None:
        """Remove the plugin named ``plugin_name`` from a route.

        Raises:
            KongNotFoundError: If no plugin of this name is attached.
        """
        plugin = self.get_by_name_for_route(route_id, plugin_name)
        if plugin is None or not plugin.id:
            raise KongNotFoundError(
                message=f"plugin '{plugin_name}' is not attached to route '{route_id}'",
                endpoint=f"/routes/{route_id}/plugins",
            )
        self.delete(plugin.id)
