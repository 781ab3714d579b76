"""Unit tests for the deploy config loader."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from kong_deploy_sync.integrations.serverless import ServerlessConfig, load_serverless_config


class TestLoadServerlessConfig:
    """Tests for load_serverless_config."""

    @pytest.mark.unit
    def test_loads_kong_sections(self, serverless_file: Path) -> None:
        """Services and function events are read from the YAML document."""
        config = load_serverless_config(serverless_file)

        assert isinstance(config, ServerlessConfig)
        assert config.custom.kong.admin_api_url == "http://kong.local:8001"
        [service] = config.custom.kong.services
        assert service.name == "users"
        assert service.routes[0].config == {"hosts": ["users.example.com"], "paths": ["/users"]}
        assert service.routes[0].plugins[0]["name"] == "rate-limiting"

    @pytest.mark.unit
    def test_only_kong_events_are_collected(self, serverless_file: Path) -> None:
        """Events of other types are ignored."""
        config = load_serverless_config(str(serverless_file))

        assert config.functions["listOrders"].kong_events == [
            {"service": "orders", "path": "/orders", "method": "get"}
        ]
        assert len(config.functions["createOrder"].kong_events) == 1

    @pytest.mark.unit
    def test_empty_file_yields_defaults(self, tmp_path: Path) -> None:
        """An empty document declares nothing."""
        path = tmp_path / "serverless.yml"
        path.write_text("")

        config = load_serverless_config(path)

        assert config.custom.kong.services == []
        assert config.custom.kong.admin_api_url is None
        assert config.functions == {}

    @pytest.mark.unit
    def test_keys_without_values_read_as_empty(self, tmp_path: Path) -> None:
        """services:, plugins:, routes: and events: left blank mean none."""
        path = tmp_path / "serverless.yml"
        path.write_text(
            "custom:\n"
            "  kong:\n"
            "    services:\n"
            "      - name: users\n"
            "        plugins:\n"
            "        routes:\n"
            "          - config:\n"
            "            plugins:\n"
            "functions:\n"
            "  listUsers:\n"
            "    events:\n"
            "  ping:\n"
        )

        config = load_serverless_config(path)

        [service] = config.custom.kong.services
        assert service.plugins == []
        assert service.routes[0].config == {}
        assert service.routes[0].plugins == []
        assert config.functions["listUsers"].events == []
        assert config.functions["ping"].kong_events == []

    @pytest.mark.unit
    def test_blank_top_level_sections(self, tmp_path: Path) -> None:
        """custom:, kong:, services: and functions: may all be left blank."""
        for document in (
            "custom:\nfunctions:\n",
            "custom:\n  kong:\n",
            "custom:\n  kong:\n    services:\n",
        ):
            path = tmp_path / "serverless.yml"
            path.write_text(document)

            config = load_serverless_config(path)

            assert config.custom.kong.services == []
            assert config.functions == {}

    @pytest.mark.unit
    def test_json_is_accepted(self, tmp_path: Path) -> None:
        """JSON documents load through the YAML parser."""
        path = tmp_path / "serverless.json"
        path.write_text('{"custom": {"kong": {"services": [{"name": "billing"}]}}}')

        config = load_serverless_config(path)

        assert [s.name for s in config.custom.kong.services] == ["billing"]

    @pytest.mark.unit
    def test_non_mapping_document_raises(self, tmp_path: Path) -> None:
        """A top-level list is not a deploy config."""
        path = tmp_path / "serverless.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_serverless_config(path)

    @pytest.mark.unit
    def test_malformed_service_raises(self, tmp_path: Path) -> None:
        """A service entry without a name fails validation."""
        path = tmp_path / "serverless.yml"
        path.write_text("custom:\n  kong:\n    services:\n      - url: http://x\n")

        with pytest.raises(ValidationError):
            load_serverless_config(path)

    @pytest.mark.unit
    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file is reported as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_serverless_config(tmp_path / "missing.yml")
