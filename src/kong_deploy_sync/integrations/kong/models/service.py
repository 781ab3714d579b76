"""Pydantic models for Kong Services.

A Service in Kong represents the upstream that matching requests are
proxied to. Services are looked up by their user-chosen ``name``; this
package only ever sets ``name`` and ``url`` and never diffs the other
fields of an existing service.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field, field_validator

from kong_deploy_sync.integrations.kong.models.base import KongEntityBase


class Service(KongEntityBase):
    """Kong Service entity model.

    Attributes:
        name: Service name (unique, the lookup key).
        url: Upstream URL shorthand (protocol://host:port/path), create only.
        host: Hostname of the upstream server (as reported by Kong).
        port: Port of the upstream server (as reported by Kong).
        protocol: Upstream protocol (as reported by Kong).
        path: Upstream path prefix (as reported by Kong).
    """

    _entity_name: ClassVar[str] = "service"

    name: str | None = Field(default=None, description="Service name (unique)")
    url: str | None = Field(default=None, description="Upstream URL shorthand")

    host: str | None = Field(default=None, description="Host of the upstream server")
    port: int | None = Field(default=None, ge=1, le=65535, description="Upstream server port")
    protocol: str | None = Field(default=None, description="Protocol to use")
    path: str | None = Field(default=None, description="Path prefix for requests")

    @field_validator("protocol", mode="before")
    @classmethod
    def lowercase_protocol(cls, v: str | None) -> str | None:
        """Ensure protocol is lowercase."""
        if v is not None:
            return v.lower()
        return v
