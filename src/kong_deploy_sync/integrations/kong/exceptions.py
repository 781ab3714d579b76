"""Kong sync custom exceptions.

Two families share the ``KongSyncError`` root: ``KongValidationError`` is
raised locally before any request is sent, ``KongAPIError`` and its
subclasses describe something the Admin API reported (or failed to report).
"""

from __future__ import annotations

import json
from typing import Any


class KongSyncError(Exception):
    """Root of every error raised by kong_deploy_sync."""


class KongValidationError(KongSyncError):
    """Exception raised when a required input is missing or empty.

    Always raised before any network call is made and never retried.

    Attributes:
        message: Human-readable error message.
        field: Name of the offending input (if known).
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize KongValidationError.

        Args:
            message: Human-readable error message.
            field: Name of the offending input.
        """
        super().__init__(message)
        self.message = message
        self.field = field

    @classmethod
    def missing(cls, field: str) -> KongValidationError:
        """Build the error for a missing required parameter.

        Args:
            field: Name of the missing parameter.

        Returns:
            KongValidationError describing the missing field.
        """
        return cls(f'Missing required "{field}" parameter.', field=field)


class KongAPIError(KongSyncError):
    """Base exception for Kong Admin API errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from Kong API (if applicable).
        response_body: Raw response body from Kong API (if available).
        endpoint: The API endpoint that was called.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongAPIError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from Kong API.
            response_body: Raw response body from Kong API.
            endpoint: The API endpoint that was called.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    @classmethod
    def from_response(
        cls,
        status_code: int,
        response_body: Any,
        endpoint: str | None = None,
    ) -> KongAPIError:
        """Build an error whose message is the serialized status and body.

        Args:
            status_code: HTTP status code returned by Kong.
            response_body: Parsed (or raw text) response body.
            endpoint: The API endpoint that was called.

        Returns:
            KongAPIError carrying the serialized response as its message.
        """
        message = json.dumps(
            {"status_code": status_code, "result": response_body},
            default=str,
        )
        return cls(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
        )

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[endpoint: {self.endpoint}]")
        return " ".join(parts)


class KongConnectionError(KongAPIError):
    """Exception raised when connection to Kong Admin API fails.

    This includes network errors, timeouts, DNS resolution failures and
    responses that cannot be read.
    """

    def __init__(
        self,
        message: str = "Failed to connect to Kong Admin API",
        endpoint: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize KongConnectionError.

        Args:
            message: Human-readable error message.
            endpoint: The API endpoint that was attempted.
            original_error: The original exception that caused this error.
        """
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class KongAuthError(KongAPIError):
    """Exception raised when Kong rejects the admin credentials (401/403)."""

    @classmethod
    def from_response(
        cls,
        status_code: int,
        response_body: Any,
        endpoint: str | None = None,
    ) -> KongAuthError:
        """Build an auth error, preferring Kong's own message."""
        message = "Authentication to Kong Admin API failed"
        if isinstance(response_body, dict) and response_body.get("message"):
            message = str(response_body["message"])
        return cls(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
        )


class KongDBLessWriteError(KongAPIError):
    """Exception raised when attempting a write operation in DB-less mode.

    In DB-less mode, Kong's Admin API is read-only and configuration must
    be applied via declarative config files.
    """

    def __init__(
        self,
        message: str = "Write operations are not allowed in DB-less mode",
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=405,
            endpoint=endpoint,
        )


class KongNotFoundError(KongAPIError):
    """Exception raised when a referenced Kong resource does not exist.

    Raised after a probe confirmed that the parent of the resource being
    written (service for a route, service or route for a plugin) is absent.
    """

    def __init__(
        self,
        message: str = "Kong resource not found",
        resource_type: str | None = None,
        resource_id: str | None = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongNotFoundError.

        Args:
            message: Human-readable error message.
            resource_type: Type of resource (e.g., "service", "route", "plugin").
            resource_id: ID or name of the resource.
            endpoint: The API endpoint that was probed.
        """
        if resource_type and resource_id:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            endpoint=endpoint,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class KongAlreadyExistsError(KongAPIError):
    """Exception raised when creating a resource a probe found present."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongAlreadyExistsError.

        Args:
            resource_type: Type of resource (e.g., "service").
            resource_id: ID or name of the resource.
            endpoint: The API endpoint that was probed.
        """
        super().__init__(
            message=f"{resource_type} '{resource_id}' already exists",
            endpoint=endpoint,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id
