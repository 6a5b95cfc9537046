"""Resource drivers — one per remote entity kind.

Public re-exports for convenient access.
"""

from linode_provider.resources.base import (
    InvalidClientError,
    InvalidIdError,
    ResourceConfigError,
    ResourceDriver,
    ResourceError,
)
from linode_provider.resources.registry import DriverTable
from linode_provider.resources.stackscript import StackscriptDriver

__all__ = [
    "DriverTable",
    "InvalidClientError",
    "InvalidIdError",
    "ResourceConfigError",
    "ResourceDriver",
    "ResourceError",
    "StackscriptDriver",
]
