"""Kong API entity models.

This package contains Pydantic models for the Kong Admin API entities
handled by the sync, plus the desired-state and report models.
"""

from kong_deploy_sync.integrations.kong.models.base import (
    KongEntityBase,
    KongEntityReference,
)
from kong_deploy_sync.integrations.kong.models.desired import (
    DesiredRoute,
    DesiredService,
)
from kong_deploy_sync.integrations.kong.models.plugin import KongPluginEntity
from kong_deploy_sync.integrations.kong.models.route import Route
from kong_deploy_sync.integrations.kong.models.service import Service
from kong_deploy_sync.integrations.kong.models.sync import SyncChange, SyncReport

__all__ = [
    "DesiredRoute",
    "DesiredService",
    "KongEntityBase",
    "KongEntityReference",
    "KongPluginEntity",
    "Route",
    "Service",
    "SyncChange",
    "SyncReport",
]
