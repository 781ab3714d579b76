"""Desired-state descriptors.

These models describe what the deploy config asks Kong to hold. They exist
only for the duration of one sync pass and are never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from kong_deploy_sync.integrations.kong.config import DEFAULT_UPSTREAM_URL
from kong_deploy_sync.integrations.kong.models.plugin import KongPluginEntity
from kong_deploy_sync.integrations.kong.models.route import Route


class DesiredRoute(BaseModel):
    """A route and the plugins attached to it.

    Attributes:
        config: Route fields in gateway shape (hosts/paths/methods lists).
        plugins: Plugins to attach to the route.
    """

    model_config = ConfigDict(extra="forbid")

    config: Route = Field(default_factory=Route, description="Route fields")
    plugins: list[KongPluginEntity] = Field(default_factory=list, description="Route plugins")


class DesiredService(BaseModel):
    """A service with its plugins and routes.

    Attributes:
        name: Service name (the lookup key).
        url: Upstream URL used when the service is created.
        plugins: Plugins to attach to the service.
        routes: Routes owned by the service.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Service name")
    url: str = Field(default=DEFAULT_UPSTREAM_URL, description="Upstream URL")
    plugins: list[KongPluginEntity] = Field(default_factory=list, description="Service plugins")
    routes: list[DesiredRoute] = Field(default_factory=list, description="Service routes")
