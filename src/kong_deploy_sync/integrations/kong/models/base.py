"""Base models for Kong entities.

This module provides common base classes and utilities for all Kong entity models.
All Kong entities share common fields (id, created_at, updated_at, tags) and
serialization patterns.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class KongEntityBase(BaseModel):
    """Base class for all Kong entity models.

    Provides common fields and configuration for Kong entities. Unknown
    fields are kept so that gateway options this package does not model
    (``strip_path``, ``regex_priority``, ...) travel from the deploy config
    to the Admin API unchanged.

    Attributes:
        id: Unique identifier (UUID string) assigned by Kong.
        created_at: Unix timestamp of creation.
        updated_at: Unix timestamp of last update.
        tags: Entity tags for filtering and organization.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str | None = Field(default=None, description="Unique identifier")
    created_at: int | None = Field(default=None, description="Unix timestamp of creation")
    updated_at: int | None = Field(default=None, description="Unix timestamp of last update")
    tags: list[str] | None = Field(default=None, description="Entity tags for filtering")

    # Subclasses should define this for better error messages
    _entity_name: ClassVar[str] = "entity"

    def to_create_payload(self) -> dict[str, Any]:
        """Convert model to payload for create operations.

        Excludes id, created_at, updated_at, and None values.
        This ensures only user-provided fields are sent to the API.

        Returns:
            Dictionary suitable for POST request body.
        """
        exclude_fields = {"id", "created_at", "updated_at"}
        return {k: v for k, v in self.model_dump(exclude=exclude_fields).items() if v is not None}

    def to_update_payload(self) -> dict[str, Any]:
        """Convert model to payload for update operations.

        Returns:
            Dictionary suitable for PATCH request body.
        """
        return self.to_create_payload()


class KongEntityReference(BaseModel):
    """Reference to another Kong entity (used for relationships).

    Attributes:
        id: Entity ID (UUID string).
        name: Entity name (alternative to ID).
    """

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None

    @classmethod
    def from_id(cls, entity_id: str) -> KongEntityReference:
        """Create a reference from an entity ID."""
        return cls(id=entity_id)
