"""Service manager for Kong Services.

This module provides the ServiceManager class for managing Kong Service
entities through the Admin API.
"""

from __future__ import annotations

from kong_deploy_sync.integrations.kong.exceptions import KongAlreadyExistsError
from kong_deploy_sync.integrations.kong.models.service import Service
from kong_deploy_sync.services.kong.base import BaseEntityManager


class ServiceManager(BaseEntityManager[Service]):
    """Manager for Kong Service entities.

    Services are addressed by name everywhere. Only creation and deletion
    are supported: an existing service's own fields are left as they are.

    Example:
        >>> manager = ServiceManager(client)
        >>> if not manager.exists("users"):
        ...     manager.create("users", "http://127.0.0.1:80/")
    """

    _endpoint = "services"
    _entity_name = "service"
    _model_class = Service

    def get(self, id_or_name: str) -> Service | None:
        """Get a service by name (or ID); None when it does not exist."""
        self._require(id_or_name, "serviceName")
        return super().get(id_or_name)

    def exists(self, id_or_name: str) -> bool:
        """Return True when the service exists."""
        self._require(id_or_name, "serviceName")
        return super().exists(id_or_name)

    def create(self, name: str, upstream_url: str) -> Service:
        """Create a service.

        Probes for the name first and refuses to create a duplicate.

        Args:
            name: Service name.
            upstream_url: Upstream URL the service proxies to.

        Returns:
            The created service with server-assigned fields populated.

        Raises:
            KongValidationError: If name or upstream_url is empty.
            KongAlreadyExistsError: If a service with this name exists.
        """
        self._require(name, "serviceName")
        self._require(upstream_url, "upstreamUrl")

        if self._client.get(f"{self._endpoint}/{name}").found:
            raise KongAlreadyExistsError(
                resource_type=self._entity_name,
                resource_id=name,
                endpoint=f"/{self._endpoint}/{name}",
            )

        payload = Service(name=name, url=upstream_url).to_create_payload()
        self._log.info("creating_entity", payload=payload)
        response = self._client.post(self._endpoint, json=payload)
        created = self._to_model(response)
        self._log.info("created_entity", id=created.id, name=name)
        return created

    def delete(self, id_or_name: str) -> None:
        """Delete a service by name (or ID)."""
        self._require(id_or_name, "serviceName")
        super().delete(id_or_name)
