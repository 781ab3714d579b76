"""Kong Gateway integration - HTTP client, configuration and API models."""

from kong_deploy_sync.integrations.kong.client import AdminResponse, KongAdminClient
from kong_deploy_sync.integrations.kong.config import (
    KongAuthConfig,
    KongConnectionConfig,
    KongSyncConfig,
)
from kong_deploy_sync.integrations.kong.exceptions import (
    KongAlreadyExistsError,
    KongAPIError,
    KongAuthError,
    KongConnectionError,
    KongNotFoundError,
    KongSyncError,
    KongValidationError,
)

__all__ = [
    "AdminResponse",
    "KongAPIError",
    "KongAdminClient",
    "KongAlreadyExistsError",
    "KongAuthConfig",
    "KongAuthError",
    "KongConnectionConfig",
    "KongConnectionError",
    "KongNotFoundError",
    "KongSyncConfig",
    "KongSyncError",
    "KongValidationError",
]
