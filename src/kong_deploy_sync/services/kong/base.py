"""Base entity manager for Kong services.

This module provides an abstract base class implementing the Repository pattern
for Kong entities. Every entity-specific manager inherits from BaseEntityManager
and adds the operations the sync needs for that entity type.
"""

from __future__ import annotations

from abc import ABC
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import structlog

from kong_deploy_sync.integrations.kong.exceptions import (
    KongNotFoundError,
    KongValidationError,
)
from kong_deploy_sync.integrations.kong.models.base import KongEntityBase

if TYPE_CHECKING:
    from kong_deploy_sync.integrations.kong.client import AdminResponse, KongAdminClient

logger = structlog.get_logger()

T = TypeVar("T", bound=KongEntityBase)


class BaseEntityManager(ABC, Generic[T]):
    """Abstract base class for Kong entity managers.

    Each public method issues its requests one after another and raises on
    the first failure. Required identifiers are checked before anything is
    sent.

    Type Parameters:
        T: The Pydantic model class for this entity type.

    Class Attributes:
        _endpoint: API endpoint path (e.g., "services", "routes").
        _entity_name: Human-readable entity name for logging.
        _model_class: Pydantic model class for deserializing responses.

    Example:
        >>> class ServiceManager(BaseEntityManager[Service]):
        ...     _endpoint = "services"
        ...     _entity_name = "service"
        ...     _model_class = Service
    """

    _endpoint: str = ""
    _entity_name: str = ""
    _model_class: type[T]

    def __init__(self, client: KongAdminClient) -> None:
        """Initialize the entity manager.

        Args:
            client: Kong Admin API client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    @property
    def endpoint(self) -> str:
        """Return the API endpoint for this entity type."""
        return self._endpoint

    @staticmethod
    def _require(value: Any, field: str) -> None:
        """Raise KongValidationError if a required argument is empty."""
        if value is None or value == "":
            raise KongValidationError.missing(field)

    def _to_model(self, response: AdminResponse) -> T:
        return self._model_class.model_validate(response.result or {})

    def _require_parent(self, endpoint: str, resource_type: str, resource_id: str) -> None:
        """Probe a parent resource and raise KongNotFoundError if it is absent.

        Args:
            endpoint: Endpoint of the parent (e.g., "services/my-service").
            resource_type: Parent type used in the error message.
            resource_id: Parent identifier used in the error message.
        """
        if not self._client.get(endpoint).found:
            raise KongNotFoundError(
                resource_type=resource_type,
                resource_id=resource_id,
                endpoint=f"/{endpoint}",
            )

    def _list_all(self, endpoint: str) -> list[T]:
        """Fetch every page of a collection endpoint.

        Kong pages with an ``offset`` token; pages are requested one at a
        time until no token is returned. A 404 yields an empty list.

        Args:
            endpoint: Collection endpoint (e.g., "services/my-service/routes").

        Returns:
            Every entity in the collection, in Kong's order.
        """
        entities: list[T] = []
        params: dict[str, Any] = {}

        while True:
            response = self._client.get(endpoint, params=params)
            entities.extend(self._model_class.model_validate(item) for item in response.data)
            next_offset = response.result.get("offset") if isinstance(response.result, dict) else None
            if not next_offset:
                break
            params = {"offset": next_offset}

        self._log.debug("listed_entities", endpoint=endpoint, count=len(entities))
        return entities

    def get(self, id_or_name: str) -> T | None:
        """Get a single entity by ID or name.

        Args:
            id_or_name: Entity ID (UUID) or unique name.

        Returns:
            The entity model, or None if Kong answered 404.
        """
        self._require(id_or_name, f"{self._entity_name}IdOrName")
        self._log.debug("getting_entity", id_or_name=id_or_name)
        response = self._client.get(f"{self._endpoint}/{id_or_name}")
        if response.result is None:
            self._log.debug("entity_not_found", id_or_name=id_or_name)
            return None
        entity = self._to_model(response)
        self._log.debug("got_entity", id=entity.id)
        return entity

    def exists(self, id_or_name: str) -> bool:
        """Check if an entity exists.

        Args:
            id_or_name: Entity ID or name to check.

        Returns:
            True if Kong answered 200 with a body, False otherwise.
        """
        self._require(id_or_name, f"{self._entity_name}IdOrName")
        return self._client.get(f"{self._endpoint}/{id_or_name}").found

    def delete(self, id_or_name: str) -> None:
        """Delete an entity.

        A missing entity is not treated as success: callers probe first.

        Args:
            id_or_name: Entity ID or name to delete.

        Raises:
            KongAPIError: If Kong rejects the delete (including 404).
        """
        self._require(id_or_name, f"{self._entity_name}IdOrName")
        self._log.info("deleting_entity", id_or_name=id_or_name)
        self._client.delete(f"{self._endpoint}/{id_or_name}")
        self._log.info("deleted_entity", id_or_name=id_or_name)
