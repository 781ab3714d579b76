"""Admin API credentials stored in ``credentials.json`` profiles.

The file is a JSON object keyed by profile name::

    {
        "default": {"adminApiUrl": "http://kong:8001", "apiKey": "secret"},
        "staging": {
            "adminApiUrl": "https://kong.staging:8444",
            "certPath": "/etc/kong/client.crt",
            "keyPath": "/etc/kong/client.key",
            "caPath": "/etc/kong/ca.crt"
        }
    }
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger()

CREDENTIALS_FILE_NAME = "credentials.json"
DEFAULT_SEARCH_PATHS = ("./.kong", "~/.kong")
DEFAULT_PROFILE = "default"


class KongCredentials(BaseModel):
    """One credentials profile."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    admin_api_url: str | None = Field(default=None, alias="adminApiUrl")
    api_key: str | None = Field(default=None, alias="apiKey")
    cert_path: str | None = Field(default=None, alias="certPath")
    key_path: str | None = Field(default=None, alias="keyPath")
    ca_path: str | None = Field(default=None, alias="caPath")
    headers: dict[str, str] = Field(default_factory=dict)


def find_credentials_file(
    search_paths: tuple[str, ...] | list[str] = DEFAULT_SEARCH_PATHS,
    file_name: str = CREDENTIALS_FILE_NAME,
) -> Path | None:
    """Return the first existing credentials file in ``search_paths``.

    Relative directories resolve against the working directory, ``~`` against
    the user's home.
    """
    for directory in search_paths:
        candidate = Path(directory).expanduser() / file_name
        if candidate.is_file():
            return candidate.resolve()
    return None


def load_credentials(
    profile: str = DEFAULT_PROFILE,
    path: Path | None = None,
    search_paths: tuple[str, ...] | list[str] = DEFAULT_SEARCH_PATHS,
) -> KongCredentials | None:
    """Load one credentials profile.

    Args:
        profile: Profile name inside the credentials file.
        path: Explicit credentials file; searched for when omitted.
        search_paths: Directories searched when ``path`` is omitted.

    Returns:
        The profile, or None when no file exists or the profile is absent.

    Raises:
        ValueError: If the file is not a JSON object.
    """
    path = path or find_credentials_file(search_paths)
    if path is None:
        logger.debug("No credentials file found", search_paths=list(search_paths))
        return None

    content = json.loads(path.read_text())
    if not isinstance(content, dict):
        raise ValueError(f"Credentials file {path} must contain a JSON object")

    entry = content.get(profile)
    if entry is None:
        logger.debug("Credentials profile not found", path=str(path), profile=profile)
        return None

    logger.debug("Loaded credentials profile", path=str(path), profile=profile)
    return KongCredentials.model_validate(entry)
