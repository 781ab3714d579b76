"""Load a Serverless deploy config from disk."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml

from kong_deploy_sync.integrations.serverless.models import ServerlessConfig

logger = structlog.get_logger()


def load_serverless_config(path: Path | str) -> ServerlessConfig:
    """Read and validate a YAML (or JSON) deploy config file.

    Args:
        path: Path of the config file.

    Returns:
        The validated config.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping.
        pydantic.ValidationError: If the Kong sections are malformed.
    """
    path = Path(path)
    with path.open() as f:
        document = yaml.safe_load(f)

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ValueError(f"Deploy config {path} must be a mapping, got {type(document).__name__}")

    config = ServerlessConfig.model_validate(document)
    logger.debug(
        "Loaded deploy config",
        path=str(path),
        services=len(config.custom.kong.services),
        functions=len(config.functions),
    )
    return config
