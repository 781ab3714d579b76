"""Pydantic models for Kong Plugins.

Plugins add behaviour (CORS, rate limiting, authentication, ...) to a
Service or a Route. Kong allows several instances of the same plugin type,
but this package treats ``name`` as unique per attachment point.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kong_deploy_sync.integrations.kong.models.base import (
    KongEntityBase,
    KongEntityReference,
)


class KongPluginEntity(KongEntityBase):
    """Kong Plugin entity model.

    Note: Named KongPluginEntity to avoid confusion with the CLI Plugin class.

    Attributes:
        name: Plugin name (e.g., 'cors', 'rate-limiting').
        service: Service the plugin is attached to (set by Kong).
        route: Route the plugin is attached to (set by Kong).
        config: Plugin-specific configuration.
        protocols: Protocols to apply plugin on.
        enabled: Whether plugin is active.
    """

    _entity_name: ClassVar[str] = "plugin"

    name: str = Field(description="Plugin name (e.g., 'cors', 'rate-limiting')")

    service: KongEntityReference | None = Field(default=None, description="Service scope")
    route: KongEntityReference | None = Field(default=None, description="Route scope")

    config: dict[str, Any] | None = Field(default=None, description="Plugin configuration")
    protocols: list[str] | None = Field(default=None, description="Protocols to apply plugin on")
    enabled: bool | None = Field(default=None, description="Whether plugin is active")

    def to_create_payload(self) -> dict[str, Any]:
        """Convert to create payload.

        The attachment is expressed by the endpoint the payload is posted to,
        so scope references are never part of the body.
        """
        payload = super().to_create_payload()
        payload.pop("service", None)
        payload.pop("route", None)
        return payload
