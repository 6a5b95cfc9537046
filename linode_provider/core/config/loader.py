"""
Configuration loader — reads provider.yml and resource files.

Provider settings come from an optional provider.yml (found by walking
up from the working directory) with LINODE_* environment variables
layered on top. Resource files are plain YAML mappings of the settable
attributes of one resource.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from linode_provider.client.http import DEFAULT_API_VERSION, DEFAULT_TIMEOUT, DEFAULT_URL

logger = logging.getLogger(__name__)

# Default config filename
PROVIDER_CONFIG_FILE = "provider.yml"

# Environment variable → ProviderConfig field
ENV_OVERRIDES = {
    "LINODE_TOKEN": "token",
    "LINODE_URL": "url",
    "LINODE_API_VERSION": "api_version",
}


class ConfigError(Exception):
    """Raised when provider or resource configuration is invalid."""


class ProviderConfig(BaseModel):
    """Settings for building the provider's API client."""

    token: str = ""
    url: str = DEFAULT_URL
    api_version: str = DEFAULT_API_VERSION
    timeout: float = DEFAULT_TIMEOUT
    mock: bool = False


def find_provider_file(start_dir: Path | None = None) -> Path | None:
    """Search for provider.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to provider.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / PROVIDER_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_provider_config(
    path: Path | None = None,
    env: dict[str, str] | None = None,
) -> ProviderConfig:
    """Load and validate provider configuration.

    A missing provider.yml is fine: defaults plus environment apply.
    An explicit ``path`` that doesn't exist is an error.

    Args:
        path: Explicit path to provider.yml. If None, searches upward.
        env: Environment mapping (default: ``os.environ``).

    Returns:
        Validated ProviderConfig.

    Raises:
        ConfigError: If the file is unreadable or invalid.
    """
    env = os.environ if env is None else env

    data: dict[str, Any] = {}
    if path is not None and not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    if path is None:
        path = find_provider_file()

    if path is not None:
        logger.debug("Loading provider config from %s", path)
        raw = _read_yaml(path)
        # The YAML may wrap everything under a "provider" key or be flat
        data = raw.get("provider", raw)
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'provider' in {path}")
        data = dict(data)

    for var, field in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            data[field] = value

    try:
        config = ProviderConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid provider configuration: {e}") from e

    logger.info(
        "Provider config: url=%s api_version=%s mock=%s",
        config.url,
        config.api_version,
        config.mock,
    )
    return config


def load_resource_config(path: Path) -> dict[str, Any]:
    """Load the attribute mapping of a single resource.

    Raises:
        ConfigError: If the file is missing, unreadable or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Resource file not found: {path}")
    return _read_yaml(path)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data
