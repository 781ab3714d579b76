"""Unit tests for the plugin manager."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import typer
from pytest_mock import MockerFixture

from kong_deploy_sync.core.plugins import Plugin, PluginManager, hookimpl


class RecordingPlugin(Plugin):
    """Plugin that records the hooks it receives."""

    name = "recording"
    version = "1.0.0"
    description = "records hooks"

    def __init__(self) -> None:
        super().__init__()
        self.apps: list[typer.Typer] = []

    @hookimpl
    def register_commands(self, app: typer.Typer) -> None:
        self.apps.append(app)


class OtherPlugin(Plugin):
    name = "other"
    version = "2.0.0"


def _entry_point(name: str, load: Any) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.load = load
    return ep


class TestPluginManager:
    """Tests for PluginManager."""

    @pytest.mark.unit
    def test_register_and_lookup(self) -> None:
        """Registered plugins are found by name."""
        manager = PluginManager()
        plugin = RecordingPlugin()

        manager.register(plugin)

        assert manager.get_plugin("recording") is plugin
        assert manager.get_plugin("missing") is None

    @pytest.mark.unit
    def test_duplicate_name_is_rejected(self) -> None:
        """Two plugins cannot share a name."""
        manager = PluginManager()
        manager.register(RecordingPlugin())

        with pytest.raises(ValueError, match="already registered"):
            manager.register(RecordingPlugin())

    @pytest.mark.unit
    def test_register_commands_reaches_every_plugin(self) -> None:
        """The register_commands hook is called on each registered plugin."""
        manager = PluginManager()
        plugin = RecordingPlugin()
        manager.register(plugin)
        manager.register(OtherPlugin())
        app = typer.Typer()

        manager.register_commands(app)

        assert plugin.apps == [app]

    @pytest.mark.unit
    def test_load_entry_points(self, mocker: MockerFixture) -> None:
        """Entry points are loaded, instantiated and registered."""
        entry_points = mocker.patch(
            "importlib.metadata.entry_points",
            return_value=[_entry_point("other", lambda: OtherPlugin)],
        )
        manager = PluginManager()

        assert manager.load_entry_points() == ["other"]
        assert isinstance(manager.get_plugin("other"), OtherPlugin)
        entry_points.assert_called_once_with(group="kong_deploy_sync.plugins")

    @pytest.mark.unit
    def test_load_entry_points_skips_registered_and_broken(self, mocker: MockerFixture) -> None:
        """Already registered names are skipped and load failures are logged."""
        broken = MagicMock(side_effect=ImportError("no module"))
        mocker.patch(
            "importlib.metadata.entry_points",
            return_value=[
                _entry_point("recording", MagicMock()),
                _entry_point("broken", broken),
                _entry_point("other", lambda: OtherPlugin),
            ],
        )
        manager = PluginManager()
        manager.register(RecordingPlugin())

        assert manager.load_entry_points() == ["other"]
        assert manager.get_plugin("broken") is None
        broken.assert_called_once()
