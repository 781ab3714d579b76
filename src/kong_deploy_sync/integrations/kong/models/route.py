"""Pydantic models for Kong Routes.

A Route in Kong defines rules for matching client requests to Services.
Routes created by this package carry no name; they are told apart by the
derived key of their ``hosts``, ``paths`` and ``methods``
(see ``kong_deploy_sync.services.kong.route_identity``).
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from kong_deploy_sync.integrations.kong.models.base import (
    KongEntityBase,
    KongEntityReference,
)

MATCH_FIELDS = ("hosts", "paths", "methods")


class Route(KongEntityBase):
    """Kong Route entity model.

    At least one of ``hosts``, ``paths`` or ``methods`` must be non-empty
    before the route is sent to Kong.

    Attributes:
        name: Route name (optional, never used for matching).
        service: Reference to the owning service.
        hosts: Host headers to match.
        paths: Path prefixes to match.
        methods: HTTP methods to match (GET, POST, etc.).
        protocols: Accepted protocols (http, https, ...).
        strip_path: Whether to strip matched path prefix.
        preserve_host: Whether to preserve original host header.
    """

    _entity_name: ClassVar[str] = "route"

    name: str | None = Field(default=None, description="Route name")
    service: KongEntityReference | None = Field(default=None, description="Owning service")

    # Matching criteria (at least one required for writes)
    hosts: list[str] | None = Field(default=None, description="Host headers to match")
    paths: list[str] | None = Field(default=None, description="Path prefixes to match")
    methods: list[str] | None = Field(default=None, description="HTTP methods (GET, POST, etc.)")

    protocols: list[str] | None = Field(default=None, description="Accepted protocols")
    strip_path: bool | None = Field(default=None, description="Strip matched path prefix")
    preserve_host: bool | None = Field(default=None, description="Preserve host header")

    @field_validator("hosts", "paths", "methods", mode="before")
    @classmethod
    def wrap_single_value(cls, v: Any) -> Any:
        """Accept a bare string where a list is expected (``paths: /users``)."""
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("methods", mode="after")
    @classmethod
    def uppercase_methods(cls, v: list[str] | None) -> list[str] | None:
        """Ensure HTTP methods are uppercase."""
        if v is not None:
            return [m.upper() for m in v]
        return v

    @field_validator("paths", mode="after")
    @classmethod
    def validate_paths(cls, v: list[str] | None) -> list[str] | None:
        """Ensure paths start with / (regex paths start with ~)."""
        if v is not None:
            return [p if p.startswith("/") or p.startswith("~") else f"/{p}" for p in v]
        return v

    @property
    def has_match_criteria(self) -> bool:
        """Return True when at least one of hosts, paths, methods is non-empty."""
        return any(getattr(self, field) for field in MATCH_FIELDS)

    def describe(self) -> str:
        """Return a human-readable summary of the match criteria."""
        parts = [
            f"{field.capitalize()}: [{', '.join(values)}]"
            for field in MATCH_FIELDS
            if (values := getattr(self, field))
        ]
        return "; ".join(parts) or "<no match criteria>"

    def to_create_payload(self) -> dict[str, Any]:
        """Convert to create payload, keeping only the id of the service reference."""
        payload = super().to_create_payload()

        if "service" in payload and isinstance(payload["service"], dict):
            service_ref = payload["service"]
            if service_ref.get("id"):
                payload["service"] = {"id": service_ref["id"]}
            elif service_ref.get("name"):
                payload["service"] = {"name": service_ref["name"]}

        return payload
