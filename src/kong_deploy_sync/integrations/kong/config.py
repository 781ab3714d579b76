"""Kong sync configuration models."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from kong_deploy_sync.integrations.kong.credentials import KongCredentials

DEFAULT_UPSTREAM_URL = "http://127.0.0.1:80/"


class KongConnectionConfig(BaseModel):
    """Kong Admin API connection configuration."""

    model_config = ConfigDict(extra="forbid")

    base_url: str = "http://localhost:8001"
    timeout: int = 30
    verify_ssl: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class KongAuthConfig(BaseModel):
    """Kong Admin API authentication configuration."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["none", "api_key", "mtls"] = "none"
    api_key: str | None = None
    header_name: str = "Kong-Admin-Token"
    cert_path: str | None = None
    key_path: str | None = None
    ca_path: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def validate_auth_type(cls, v: str) -> str:
        """Validate authentication type."""
        valid_types = {"none", "api_key", "mtls"}
        if v not in valid_types:
            raise ValueError(f"auth type must be one of: {', '.join(sorted(valid_types))}")
        return v

    def default_headers(self) -> dict[str, str]:
        """Return the headers sent with every Admin API request."""
        headers = dict(self.headers)
        if self.type == "api_key" and self.api_key:
            headers[self.header_name] = self.api_key
        return headers


class KongSyncConfig(BaseModel):
    """Complete configuration of a sync run."""

    model_config = ConfigDict(extra="forbid")

    connection: KongConnectionConfig = KongConnectionConfig()
    auth: KongAuthConfig = KongAuthConfig()
    config_file: str = "serverless.yml"
    profile: str = "default"
    default_upstream_url: str = DEFAULT_UPSTREAM_URL

    @classmethod
    def from_env(
        cls,
        *,
        admin_api_url: str | None = None,
        credentials: KongCredentials | None = None,
    ) -> KongSyncConfig:
        """Create configuration with deploy config, credential and environment overrides.

        Precedence, lowest first: the built-in defaults, the ``adminApiUrl``
        from the deploy config, the credentials profile, environment variables.

        Supported environment variables:
            KONG_SYNC_ADMIN_URL: Kong Admin API base URL
            KONG_SYNC_API_KEY: API key for authentication
            KONG_SYNC_AUTH_TYPE: Authentication type (none, api_key, mtls)
            KONG_SYNC_CONFIG_FILE: Path of the declarative deploy config
            KONG_SYNC_PROFILE: Credentials profile name

        Args:
            admin_api_url: ``custom.kong.adminApiUrl`` from the deploy config.
            credentials: Credentials loaded from a ``credentials.json`` profile.

        Returns:
            Validated KongSyncConfig.

        Raises:
            ValidationError: If a resulting value is malformed.
        """
        config_dict: dict[str, Any] = {}
        connection: dict[str, Any] = config_dict.setdefault("connection", {})
        auth: dict[str, Any] = config_dict.setdefault("auth", {})

        if admin_api_url:
            connection["base_url"] = admin_api_url

        if credentials is not None:
            if credentials.admin_api_url:
                connection["base_url"] = credentials.admin_api_url
            if credentials.api_key:
                auth["api_key"] = credentials.api_key
                auth["type"] = "api_key"
            if credentials.cert_path and credentials.key_path:
                auth["cert_path"] = credentials.cert_path
                auth["key_path"] = credentials.key_path
                auth["ca_path"] = credentials.ca_path
                # A client certificate takes over from the API key
                auth["type"] = "mtls"
            if credentials.headers:
                auth["headers"] = dict(credentials.headers)

        if base_url := os.environ.get("KONG_SYNC_ADMIN_URL"):
            connection["base_url"] = base_url

        if api_key := os.environ.get("KONG_SYNC_API_KEY"):
            auth["api_key"] = api_key
            # Auto-set auth type to api_key if key is provided
            if auth.get("type", "none") == "none":
                auth["type"] = "api_key"

        if auth_type := os.environ.get("KONG_SYNC_AUTH_TYPE"):
            auth["type"] = auth_type

        if config_file := os.environ.get("KONG_SYNC_CONFIG_FILE"):
            config_dict["config_file"] = config_file

        if profile := os.environ.get("KONG_SYNC_PROFILE"):
            config_dict["profile"] = profile

        return cls.model_validate(config_dict)
