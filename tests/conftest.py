"""Shared pytest fixtures for kong_deploy_sync tests."""

from __future__ import annotations

import itertools
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from kong_deploy_sync.integrations.kong.client import AdminResponse
from kong_deploy_sync.integrations.kong.exceptions import KongAPIError
from kong_deploy_sync.services.kong.gateway import KongGateway

SERVERLESS_YML = """
service: users-api

custom:
  kong:
    adminApiUrl: http://kong.local:8001
    services:
      - name: users
        url: http://users.internal:8080
        plugins:
          - name: cors
            config:
              origins: ["*"]
        routes:
          - config:
              hosts: [users.example.com]
              paths: [/users]
            plugins:
              - name: rate-limiting
                config:
                  minute: 100

functions:
  listOrders:
    handler: orders.list
    events:
      - http: GET /orders
      - kong:
          service: orders
          path: /orders
          method: get
  createOrder:
    handler: orders.create
    events:
      - kong:
          service: orders
          path: /orders
          method: post
          plugins:
            - name: request-size-limiting
              config:
                allowed_payload_size: 1
"""


class FakeKongAdmin:
    """In-memory Kong Admin API with the KongAdminClient interface.

    Services are addressed by name or id, routes and plugins by id. Every
    call is appended to ``calls`` as ``(METHOD, endpoint)``. Deleting a
    service that still has routes fails the way Kong does; plugins go with
    their owner.
    """

    def __init__(self) -> None:
        self.services: dict[str, dict[str, Any]] = {}
        self.routes: dict[str, dict[str, Any]] = {}
        self.plugins: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self._ids = itertools.count(1)
        self.closed = False

    # Seeding helpers

    def _new_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"

    def add_service(self, name: str, url: str = "http://127.0.0.1:80/") -> dict[str, Any]:
        service = {"id": self._new_id("svc"), "name": name, "url": url}
        self.services[service["id"]] = service
        return service

    def add_route(self, service_name: str, **fields: Any) -> dict[str, Any]:
        service = self._service(service_name)
        assert service is not None
        route = {"id": self._new_id("route"), "service": {"id": service["id"]}, **fields}
        self.routes[route["id"]] = route
        return route

    def add_plugin(
        self,
        name: str,
        *,
        service: str | None = None,
        route_id: str | None = None,
        config: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        plugin: dict[str, Any] = {
            "id": self._new_id("plugin"),
            "name": name,
            "config": config or {},
            "service": None,
            "route": None,
        }
        if service is not None:
            svc = self._service(service)
            assert svc is not None
            plugin["service"] = {"id": svc["id"]}
        if route_id is not None:
            plugin["route"] = {"id": route_id}
        self.plugins[plugin["id"]] = plugin
        return plugin

    def fail(self, method: str, endpoint: str, status: int = 500) -> None:
        """Make the next matching call answer ``status``."""
        self.failures[(method, endpoint)] = status

    def writes(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] != "GET"]

    # Lookups

    def _service(self, id_or_name: str) -> dict[str, Any] | None:
        return next(
            (s for s in self.services.values() if id_or_name in (s["id"], s["name"])),
            None,
        )

    def routes_of(self, service_name: str) -> list[dict[str, Any]]:
        service = self._service(service_name)
        if service is None:
            return []
        return [r for r in self.routes.values() if r["service"]["id"] == service["id"]]

    def plugins_of_service(self, service_name: str) -> list[dict[str, Any]]:
        service = self._service(service_name)
        if service is None:
            return []
        return [
            p
            for p in self.plugins.values()
            if p["service"] and p["service"]["id"] == service["id"] and not p["route"]
        ]

    def plugins_of_route(self, route_id: str) -> list[dict[str, Any]]:
        return [p for p in self.plugins.values() if p["route"] and p["route"]["id"] == route_id]

    # KongAdminClient interface

    def _record(self, method: str, endpoint: str) -> list[str]:
        endpoint = endpoint.strip("/")
        self.calls.append((method, endpoint))
        status = self.failures.pop((method, endpoint), None)
        if status is not None:
            raise KongAPIError.from_response(status, {"message": "injected"}, f"/{endpoint}")
        return endpoint.split("/")

    @staticmethod
    def _collection(items: list[dict[str, Any]]) -> AdminResponse:
        return AdminResponse(200, {"data": items, "next": None})

    def get(self, endpoint: str, **kwargs: Any) -> AdminResponse:
        parts = self._record("GET", endpoint)
        not_found = AdminResponse(404, None)
        match parts:
            case ["services", name]:
                service = self._service(name)
                return AdminResponse(200, service) if service else not_found
            case ["services", name, "routes"]:
                if self._service(name) is None:
                    return not_found
                return self._collection(self.routes_of(name))
            case ["services", name, "plugins"]:
                if self._service(name) is None:
                    return not_found
                service = self._service(name)
                assert service is not None
                return self._collection(
                    [
                        p
                        for p in self.plugins.values()
                        if p["service"] and p["service"]["id"] == service["id"]
                    ]
                )
            case ["routes", route_id]:
                route = self.routes.get(route_id)
                return AdminResponse(200, route) if route else not_found
            case ["routes", route_id, "plugins"]:
                if route_id not in self.routes:
                    return not_found
                return self._collection(self.plugins_of_route(route_id))
            case ["plugins", plugin_id]:
                plugin = self.plugins.get(plugin_id)
                return AdminResponse(200, plugin) if plugin else not_found
        return not_found

    def post(self, endpoint: str, json: dict[str, Any] | None = None, **kwargs: Any) -> AdminResponse:
        parts = self._record("POST", endpoint)
        body = dict(json or {})
        match parts:
            case ["services"]:
                if self._service(body["name"]):
                    raise KongAPIError.from_response(409, {"message": "unique"}, "/services")
                return AdminResponse(201, self.add_service(body["name"], body["url"]))
            case ["routes"]:
                service = self._service(body["service"]["id"])
                if service is None:
                    raise KongAPIError.from_response(400, {"message": "bad service"}, "/routes")
                body.pop("service")
                return AdminResponse(201, self.add_route(service["name"], **body))
            case ["services", name, "plugins"]:
                config = body.pop("config", None)
                return AdminResponse(201, self.add_plugin(body["name"], service=name, config=config))
            case ["routes", route_id, "plugins"]:
                config = body.pop("config", None)
                return AdminResponse(
                    201, self.add_plugin(body["name"], route_id=route_id, config=config)
                )
        raise KongAPIError.from_response(404, {"message": "Not found"}, f"/{endpoint}")

    def patch(self, endpoint: str, json: dict[str, Any] | None = None, **kwargs: Any) -> AdminResponse:
        parts = self._record("PATCH", endpoint)
        match parts:
            case ["routes", route_id] if route_id in self.routes:
                self.routes[route_id].update(json or {})
                return AdminResponse(200, self.routes[route_id])
            case ["plugins", plugin_id] if plugin_id in self.plugins:
                self.plugins[plugin_id].update(json or {})
                return AdminResponse(200, self.plugins[plugin_id])
        raise KongAPIError.from_response(404, {"message": "Not found"}, f"/{endpoint}")

    def delete(self, endpoint: str, **kwargs: Any) -> AdminResponse:
        parts = self._record("DELETE", endpoint)
        match parts:
            case ["services", name] if (service := self._service(name)) is not None:
                if self.routes_of(name):
                    raise KongAPIError.from_response(
                        400, {"message": "an existing 'routes' entity references"}, f"/{endpoint}"
                    )
                for plugin in self.plugins_of_service(name):
                    del self.plugins[plugin["id"]]
                del self.services[service["id"]]
                return AdminResponse(204, None)
            case ["routes", route_id] if route_id in self.routes:
                for plugin in self.plugins_of_route(route_id):
                    del self.plugins[plugin["id"]]
                del self.routes[route_id]
                return AdminResponse(204, None)
            case ["plugins", plugin_id] if plugin_id in self.plugins:
                del self.plugins[plugin_id]
                return AdminResponse(204, None)
        raise KongAPIError.from_response(404, {"message": "Not found"}, f"/{endpoint}")

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeKongAdmin:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_admin() -> FakeKongAdmin:
    """An empty in-memory Kong Admin API."""
    return FakeKongAdmin()


@pytest.fixture
def gateway(fake_admin: FakeKongAdmin) -> KongGateway:
    """Gateway managers wired to the in-memory Admin API."""
    return KongGateway.from_client(fake_admin)  # type: ignore[arg-type]


@pytest.fixture
def serverless_file(tmp_path: Path) -> Path:
    """A deploy config declaring two services."""
    path = tmp_path / "serverless.yml"
    path.write_text(SERVERLESS_YML)
    return path


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path]:
    """Run the test from an empty directory with an empty home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KONG_SYNC_"):
            monkeypatch.delenv(key, raising=False)
