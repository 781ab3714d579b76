"""Pydantic models for the parts of a Serverless deploy config the sync reads.

Two places may declare Kong resources:

``custom.kong.services``
    Services in gateway shape, each with its plugins and routes.

``functions.<name>.events[].kong``
    A flat route descriptor per function event
    (``{service, host?, path?, method?, plugins?}``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _empty_list(v: Any) -> Any:
    return [] if v is None else v


def _empty_dict(v: Any) -> Any:
    return {} if v is None else v


class KongRouteSpec(BaseModel):
    """A route entry under ``custom.kong.services[].routes``."""

    model_config = ConfigDict(extra="forbid")

    config: dict[str, Any] = Field(default_factory=dict, description="Route fields")
    plugins: list[dict[str, Any]] = Field(default_factory=list, description="Route plugins")

    # YAML keys left without a value parse as null
    normalize_config = field_validator("config", mode="before")(_empty_dict)
    normalize_plugins = field_validator("plugins", mode="before")(_empty_list)


class KongServiceSpec(BaseModel):
    """A service entry under ``custom.kong.services``."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Service name")
    url: str | None = Field(default=None, description="Upstream URL")
    plugins: list[dict[str, Any]] = Field(default_factory=list, description="Service plugins")
    routes: list[KongRouteSpec] = Field(default_factory=list, description="Service routes")

    normalize_lists = field_validator("plugins", "routes", mode="before")(_empty_list)


class KongCustomSection(BaseModel):
    """The ``custom.kong`` section."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    admin_api_url: str | None = Field(default=None, alias="adminApiUrl")
    services: list[KongServiceSpec] = Field(default_factory=list)

    normalize_services = field_validator("services", mode="before")(_empty_list)


class CustomSection(BaseModel):
    """The ``custom`` section; only ``kong`` is interpreted."""

    model_config = ConfigDict(extra="allow")

    kong: KongCustomSection = Field(default_factory=KongCustomSection)

    normalize_kong = field_validator("kong", mode="before")(_empty_dict)


class FunctionSpec(BaseModel):
    """A function entry; only its ``events`` are interpreted."""

    model_config = ConfigDict(extra="allow")

    events: list[dict[str, Any]] = Field(default_factory=list)

    normalize_events = field_validator("events", mode="before")(_empty_list)

    @property
    def kong_events(self) -> list[dict[str, Any]]:
        """Return the ``kong`` payload of every event that has one."""
        return [event["kong"] for event in self.events if isinstance(event.get("kong"), dict)]


class ServerlessConfig(BaseModel):
    """Top-level deploy config document."""

    model_config = ConfigDict(extra="allow")

    custom: CustomSection = Field(default_factory=CustomSection)
    functions: dict[str, FunctionSpec] = Field(default_factory=dict)

    normalize_custom = field_validator("custom", mode="before")(_empty_dict)

    @field_validator("functions", mode="before")
    @classmethod
    def normalize_functions(cls, v: Any) -> Any:
        """Treat a missing functions map, or a function without a body, as empty."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {name: spec if spec is not None else {} for name, spec in v.items()}
        return v
