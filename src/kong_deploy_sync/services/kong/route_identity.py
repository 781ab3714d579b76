"""Derived identity key for Kong routes.

Kong gives routes no user-chosen name, so a route from the deploy config and
a route read back from Kong are matched on their match criteria instead.
The key is recomputed on every comparison and never stored.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from kong_deploy_sync.integrations.kong.models.route import MATCH_FIELDS, Route

FIELD_SEPARATOR = "|"
VALUE_SEPARATOR = ","


def route_key(route: Route | Mapping[str, Any] | None) -> str:
    """Return the canonical key of a route's hosts, paths and methods.

    Values are sorted within each field and joined with ``,``; the non-empty
    fields are then joined with ``|`` in the fixed order hosts, paths,
    methods. Input order never matters; a route with no criteria yields
    ``""``.

    Args:
        route: A Route model, a mapping in gateway shape, or None.

    Returns:
        The derived key.

    Example:
        >>> route_key({"hosts": ["www.example.com", "example.com"], "paths": ["/users"]})
        'example.com,www.example.com|/users'
    """
    if route is None:
        return ""

    fields: list[str] = []
    for field in MATCH_FIELDS:
        if isinstance(route, Mapping):
            values = route.get(field)
        else:
            values = getattr(route, field, None)
        if values:
            fields.append(VALUE_SEPARATOR.join(sorted(values)))

    return FIELD_SEPARATOR.join(fields)


def same_route(
    left: Route | Mapping[str, Any] | None,
    right: Route | Mapping[str, Any] | None,
) -> bool:
    """Return True when two routes share the same derived key."""
    return route_key(left) == route_key(right)
