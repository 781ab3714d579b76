"""Kong Admin API HTTP client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from kong_deploy_sync.integrations.kong.exceptions import (
    KongAPIError,
    KongAuthError,
    KongConnectionError,
    KongDBLessWriteError,
)

if TYPE_CHECKING:
    from kong_deploy_sync.integrations.kong.config import (
        KongAuthConfig,
        KongConnectionConfig,
    )

logger = structlog.get_logger()

STATUS_OK = 200
STATUS_NOT_FOUND = 404


@dataclass(frozen=True)
class AdminResponse:
    """Uniform result of one Admin API call.

    Attributes:
        status_code: HTTP status code returned by Kong.
        result: Parsed JSON body, raw text when the body is not JSON, or
            None for empty bodies and for GET requests answered with 404.
    """

    status_code: int
    result: Any = None

    @property
    def found(self) -> bool:
        """Return True when the call answered 200 with a body."""
        return self.status_code == STATUS_OK and self.result is not None

    @property
    def data(self) -> list[dict[str, Any]]:
        """Return the ``data`` list of a collection envelope (empty if absent)."""
        if isinstance(self.result, dict):
            return list(self.result.get("data") or [])
        return []


class KongAdminClient:
    """HTTP client for Kong Admin API.

    Every method issues exactly one request: there is no retry and no
    backoff. A 404 answer to a GET is returned as
    ``AdminResponse(404, None)`` so callers can use GETs as existence
    probes; a 404 for any other method is raised like any other error.

    Example:
        ```python
        from kong_deploy_sync.integrations.kong import KongAdminClient
        from kong_deploy_sync.integrations.kong.config import KongConnectionConfig

        connection = KongConnectionConfig(base_url="http://localhost:8001")

        with KongAdminClient(connection) as client:
            response = client.get("services/my-service")
            print(response.status_code, response.result)
        ```
    """

    def __init__(
        self,
        connection_config: KongConnectionConfig,
        auth_config: KongAuthConfig | None = None,
    ) -> None:
        """Initialize Kong Admin API client.

        Args:
            connection_config: Connection settings (URL, timeout, SSL).
            auth_config: Authentication settings (type, credentials, headers).
        """
        self.connection_config = connection_config
        self.auth_config = auth_config

        client_kwargs: dict[str, Any] = {
            "base_url": connection_config.base_url,
            "timeout": httpx.Timeout(connection_config.timeout),
            "verify": connection_config.verify_ssl,
        }

        headers: dict[str, str] = {}
        if auth_config:
            headers.update(auth_config.default_headers())
            if auth_config.type == "mtls" and auth_config.cert_path and auth_config.key_path:
                client_kwargs["cert"] = (auth_config.cert_path, auth_config.key_path)
                if auth_config.ca_path:
                    client_kwargs["verify"] = auth_config.ca_path
                logger.debug("Kong client configured with mTLS auth")

        if headers:
            client_kwargs["headers"] = headers

        self._client = httpx.Client(**client_kwargs)

        logger.info(
            "Kong Admin API client initialized",
            base_url=connection_config.base_url,
            auth_type=auth_config.type if auth_config else "none",
        )

    def _handle_response(
        self,
        response: httpx.Response,
        method: str,
        endpoint: str,
    ) -> AdminResponse:
        """Normalize an HTTP response or raise the matching exception.

        Args:
            response: The HTTP response from Kong API.
            method: HTTP method that produced the response.
            endpoint: The endpoint that was called.

        Returns:
            AdminResponse for 2xx answers and for GET 404s.

        Raises:
            KongAuthError: If authentication failed (401/403).
            KongDBLessWriteError: If write attempted in DB-less mode (405).
            KongAPIError: For every other non-2xx answer.
        """
        body: Any
        if not response.content:
            body = None
        else:
            try:
                body = response.json()
            except ValueError:
                body = response.text

        status = response.status_code

        if status == STATUS_NOT_FOUND and method == "GET":
            return AdminResponse(status_code=status, result=None)

        if 200 <= status < 300:
            return AdminResponse(status_code=status, result=body)

        if status in (401, 403):
            raise KongAuthError.from_response(status, body, endpoint)

        if status == 405:
            message = str(body.get("message", "")) if isinstance(body, dict) else ""
            if "read-only" in message.lower() or "db-less" in message.lower():
                raise KongDBLessWriteError(endpoint=endpoint)

        raise KongAPIError.from_response(status, body, endpoint)

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> AdminResponse:
        """Make a single HTTP request to Kong Admin API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE).
            endpoint: API endpoint (will be prefixed with base URL).
            **kwargs: Additional arguments to pass to httpx.

        Returns:
            Normalized response.

        Raises:
            KongConnectionError: If the request never produced a response.
            KongAPIError: If Kong returns an error response.
        """
        method = method.upper()
        url = f"/{endpoint.lstrip('/')}"
        log = logger.bind(method=method, endpoint=url)

        try:
            log.debug("Kong API request")
            response = self._client.request(method, url, **kwargs)
            log.debug("Kong API response", status=response.status_code)
        except httpx.TimeoutException as e:
            log.error("Kong request timeout", error=str(e))
            raise KongConnectionError(
                message=f"Kong request timed out: {e}",
                endpoint=url,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            log.error("Kong connection error", error=str(e))
            raise KongConnectionError(
                message=f"Failed to connect to Kong: {e}",
                endpoint=url,
                original_error=e,
            ) from e

        return self._handle_response(response, method, url)

    def get(self, endpoint: str, **kwargs: Any) -> AdminResponse:
        """GET request to Kong Admin API.

        Args:
            endpoint: API endpoint (e.g., "services", "services/my-service").
            **kwargs: Additional request parameters (e.g. ``params``).

        Returns:
            Normalized response; ``result`` is None when Kong answered 404.
        """
        return self.request("GET", endpoint, **kwargs)

    def post(
        self,
        endpoint: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> AdminResponse:
        """POST request to Kong Admin API.

        Args:
            endpoint: API endpoint.
            json: Request body as dictionary.
            **kwargs: Additional request parameters.

        Returns:
            Normalized response carrying the created resource.
        """
        return self.request("POST", endpoint, json=json, **kwargs)

    def patch(
        self,
        endpoint: str,
        json: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> AdminResponse:
        """PATCH request to Kong Admin API.

        Args:
            endpoint: API endpoint.
            json: Request body as dictionary (partial update).
            **kwargs: Additional request parameters.

        Returns:
            Normalized response carrying the updated resource.
        """
        return self.request("PATCH", endpoint, json=json, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> AdminResponse:
        """DELETE request to Kong Admin API.

        Args:
            endpoint: API endpoint.
            **kwargs: Additional request parameters.

        Returns:
            Normalized response (normally 204 with no body).
        """
        return self.request("DELETE", endpoint, **kwargs)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()
        logger.debug("Kong client closed")

    def __enter__(self) -> KongAdminClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
