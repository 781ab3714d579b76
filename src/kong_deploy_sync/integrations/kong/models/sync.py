"""Models describing the outcome of a sync pass."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SyncOperation = Literal["create", "update", "delete", "skip"]


class SyncChange(BaseModel):
    """Result of a single reconciliation step.

    Attributes:
        operation: Operation performed (create, update, delete, skip).
        entity_type: Type of entity affected (service, route, plugin).
        id_or_name: Entity identifier (name, id, or route description).
        parent: Identifier of the owning service or route, if any.
    """

    model_config = ConfigDict(extra="forbid")

    operation: SyncOperation = Field(description="Operation performed")
    entity_type: str = Field(description="Entity type")
    id_or_name: str = Field(description="Entity identifier")
    parent: str | None = Field(default=None, description="Owning entity")


class SyncReport(BaseModel):
    """Ordered record of every change a sync pass committed."""

    model_config = ConfigDict(extra="forbid")

    changes: list[SyncChange] = Field(default_factory=list)

    def record(
        self,
        operation: SyncOperation,
        entity_type: str,
        id_or_name: str,
        parent: str | None = None,
    ) -> SyncChange:
        """Append a change and return it."""
        change = SyncChange(
            operation=operation,
            entity_type=entity_type,
            id_or_name=id_or_name,
            parent=parent,
        )
        self.changes.append(change)
        return change

    def extend(self, other: SyncReport) -> None:
        """Append every change of ``other``."""
        self.changes.extend(other.changes)

    def count(self, operation: SyncOperation, entity_type: str | None = None) -> int:
        """Count changes of one operation, optionally for one entity type."""
        return sum(
            1
            for change in self.changes
            if change.operation == operation
            and (entity_type is None or change.entity_type == entity_type)
        )
