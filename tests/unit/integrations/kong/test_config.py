"""Unit tests for Kong sync configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from kong_deploy_sync.integrations.kong.config import (
    DEFAULT_UPSTREAM_URL,
    KongAuthConfig,
    KongConnectionConfig,
    KongSyncConfig,
)
from kong_deploy_sync.integrations.kong.credentials import KongCredentials


class TestKongConnectionConfig:
    """Tests for KongConnectionConfig."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Defaults point at a local Admin API."""
        config = KongConnectionConfig()

        assert config.base_url == "http://localhost:8001"
        assert config.timeout == 30
        assert config.verify_ssl is True

    @pytest.mark.unit
    def test_trailing_slash_is_removed(self) -> None:
        """base_url is normalized without a trailing slash."""
        assert KongConnectionConfig(base_url="http://kong:8001/").base_url == "http://kong:8001"

    @pytest.mark.unit
    @pytest.mark.parametrize("base_url", ["kong:8001", "ftp://kong"])
    def test_invalid_scheme_rejected(self, base_url: str) -> None:
        """base_url must be http or https."""
        with pytest.raises(ValidationError):
            KongConnectionConfig(base_url=base_url)

    @pytest.mark.unit
    def test_timeout_must_be_positive(self) -> None:
        """Zero timeout is rejected."""
        with pytest.raises(ValidationError):
            KongConnectionConfig(timeout=0)


class TestKongAuthConfig:
    """Tests for KongAuthConfig."""

    @pytest.mark.unit
    def test_default_headers_without_auth(self) -> None:
        """No auth sends only the extra headers."""
        assert KongAuthConfig(headers={"X-A": "1"}).default_headers() == {"X-A": "1"}

    @pytest.mark.unit
    def test_default_headers_with_api_key(self) -> None:
        """API key auth adds the configured header."""
        auth = KongAuthConfig(type="api_key", api_key="k", header_name="apikey")

        assert auth.default_headers() == {"apikey": "k"}

    @pytest.mark.unit
    def test_invalid_type_rejected(self) -> None:
        """Unknown auth types are rejected."""
        with pytest.raises(ValidationError):
            KongAuthConfig(type="oauth")  # type: ignore[arg-type]


class TestKongSyncConfigFromEnv:
    """Tests for KongSyncConfig.from_env."""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """Without overrides the defaults apply."""
        config = KongSyncConfig.from_env()

        assert config.connection.base_url == "http://localhost:8001"
        assert config.auth.type == "none"
        assert config.config_file == "serverless.yml"
        assert config.profile == "default"
        assert config.default_upstream_url == DEFAULT_UPSTREAM_URL

    @pytest.mark.unit
    def test_admin_api_url_overrides_default(self) -> None:
        """The deploy config's adminApiUrl replaces the built-in URL."""
        config = KongSyncConfig.from_env(admin_api_url="http://deploy:8001")

        assert config.connection.base_url == "http://deploy:8001"

    @pytest.mark.unit
    def test_credentials_override_admin_api_url(self) -> None:
        """Credentials win over adminApiUrl and enable API key auth."""
        credentials = KongCredentials(
            adminApiUrl="https://creds:8444", apiKey="secret", headers={"X-Env": "prod"}
        )

        config = KongSyncConfig.from_env(
            admin_api_url="http://deploy:8001", credentials=credentials
        )

        assert config.connection.base_url == "https://creds:8444"
        assert config.auth.type == "api_key"
        assert config.auth.default_headers() == {"X-Env": "prod", "Kong-Admin-Token": "secret"}

    @pytest.mark.unit
    def test_environment_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """KONG_SYNC_* variables override everything else."""
        monkeypatch.setenv("KONG_SYNC_ADMIN_URL", "http://env:8001")
        monkeypatch.setenv("KONG_SYNC_API_KEY", "env-key")
        monkeypatch.setenv("KONG_SYNC_CONFIG_FILE", "deploy.yml")
        monkeypatch.setenv("KONG_SYNC_PROFILE", "staging")

        config = KongSyncConfig.from_env(
            admin_api_url="http://deploy:8001",
            credentials=KongCredentials(adminApiUrl="http://creds:8001", apiKey="creds-key"),
        )

        assert config.connection.base_url == "http://env:8001"
        assert config.auth.api_key == "env-key"
        assert config.config_file == "deploy.yml"
        assert config.profile == "staging"

    @pytest.mark.unit
    def test_credentials_with_client_certificate(self) -> None:
        """certPath and keyPath select mTLS over the API key."""
        credentials = KongCredentials(
            adminApiUrl="https://kong:8444",
            apiKey="unused",
            certPath="/certs/client.crt",
            keyPath="/certs/client.key",
        )

        config = KongSyncConfig.from_env(credentials=credentials)

        assert config.auth.type == "mtls"
        assert config.auth.cert_path == "/certs/client.crt"
        assert config.auth.key_path == "/certs/client.key"
        assert config.auth.ca_path is None
        assert "Kong-Admin-Token" not in config.auth.default_headers()

    @pytest.mark.unit
    def test_certificate_without_key_is_ignored(self) -> None:
        """A lone certPath keeps the profile's other settings."""
        config = KongSyncConfig.from_env(
            credentials=KongCredentials(apiKey="k", certPath="/certs/client.crt")
        )

        assert config.auth.type == "api_key"
        assert config.auth.cert_path is None

    @pytest.mark.unit
    def test_unknown_auth_type_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """KONG_SYNC_AUTH_TYPE is validated like any other value."""
        monkeypatch.setenv("KONG_SYNC_AUTH_TYPE", "bogus")

        with pytest.raises(ValidationError):
            KongSyncConfig.from_env()
