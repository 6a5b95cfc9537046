"""
Provider assembly — build the client and the driver table.

The only place that decides which client backs the drivers. Callers get
a fresh ``DriverTable`` each time; nothing is registered globally.
"""

from __future__ import annotations

import logging

from linode_provider.client.base import StackscriptClient
from linode_provider.client.http import LinodeClient
from linode_provider.client.mock import MockClient
from linode_provider.core.config.loader import ConfigError, ProviderConfig
from linode_provider.resources.registry import DriverTable
from linode_provider.resources.stackscript import StackscriptDriver

logger = logging.getLogger(__name__)


def build_client(config: ProviderConfig) -> StackscriptClient:
    """The API client described by ``config``.

    Raises:
        ConfigError: a real client was requested without a token.
    """
    if config.mock:
        logger.info("Using in-memory mock client")
        return MockClient()

    if not config.token:
        raise ConfigError(
            "No Linode API token configured. Set LINODE_TOKEN or 'token' in provider.yml."
        )
    return LinodeClient(
        token=config.token,
        url=config.url,
        api_version=config.api_version,
        timeout=config.timeout,
    )


def build_provider(
    config: ProviderConfig | None = None,
    client: StackscriptClient | None = None,
) -> DriverTable:
    """Assemble the driver table.

    Args:
        config: Provider settings, used to build a client when none is given.
        client: An explicit client (tests, embedding applications).
    """
    if client is None:
        client = build_client(config or ProviderConfig())

    return DriverTable([
        StackscriptDriver(client),
    ])
