"""API clients — the remote side a resource driver talks to.

Public re-exports for convenient access.
"""

from linode_provider.client.base import StackscriptClient
from linode_provider.client.errors import ApiError, NotFoundError
from linode_provider.client.http import LinodeClient
from linode_provider.client.mock import MockClient

__all__ = [
    "ApiError",
    "LinodeClient",
    "MockClient",
    "NotFoundError",
    "StackscriptClient",
]
