"""Unit tests for the CLI entry point."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture
from typer.testing import CliRunner

from kong_deploy_sync import __version__
from kong_deploy_sync.cli.main import create_app
from kong_deploy_sync.core.plugins import PluginManager
from kong_deploy_sync.plugins.kong.plugin import KongSyncPlugin


@pytest.fixture
def configure_logging(mocker: MockerFixture) -> MagicMock:
    """Keep the CLI from touching the real logging setup."""
    return mocker.patch("kong_deploy_sync.cli.main.configure_logging")


class TestMain:
    """Tests for the root command."""

    @pytest.mark.unit
    def test_version(self, cli_runner: CliRunner, configure_logging: MagicMock) -> None:
        """--version prints the version and exits."""
        result = cli_runner.invoke(create_app(), ["--version"])

        assert result.exit_code == 0
        assert f"kong-sync version {__version__}" in result.output
        configure_logging.assert_not_called()

    @pytest.mark.unit
    def test_no_arguments_shows_help(self, cli_runner: CliRunner) -> None:
        """Running without a command prints usage."""
        result = cli_runner.invoke(create_app(), [])

        assert "Usage" in result.output
        assert "kong" in result.output

    @pytest.mark.unit
    def test_flags_configure_logging(
        self, cli_runner: CliRunner, configure_logging: MagicMock
    ) -> None:
        """Global flags are handed to configure_logging."""
        result = cli_runner.invoke(create_app(), ["-v", "--json-logs", "kong", "--help"])

        assert result.exit_code == 0
        configure_logging.assert_called_once_with(verbose=True, debug=False, json_output=True)


class TestCreateApp:
    """Tests for create_app."""

    @pytest.mark.unit
    def test_builtin_plugin_is_registered(self, mocker: MockerFixture) -> None:
        """The kong plugin is available even without entry points."""
        mocker.patch("importlib.metadata.entry_points", return_value=[])
        manager = PluginManager()

        create_app(manager)

        plugin = manager.get_plugin("kong")
        assert isinstance(plugin, KongSyncPlugin)

    @pytest.mark.unit
    def test_existing_registration_is_reused(self, mocker: MockerFixture) -> None:
        """A manager that already holds the kong plugin keeps it."""
        mocker.patch("importlib.metadata.entry_points", return_value=[])
        manager = PluginManager()
        plugin = KongSyncPlugin()
        manager.register(plugin)

        create_app(manager)

        assert manager.get_plugin("kong") is plugin
