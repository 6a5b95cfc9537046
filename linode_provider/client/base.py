"""
Client base — the API contract a resource driver depends on.

Drivers only talk to the API through this interface. The concrete
client (HTTP or in-memory) is injected when the driver is built, so
transport, authentication and rate limiting stay outside the driver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from linode_provider.core.models.stackscript import (
    Stackscript,
    StackscriptCreateOptions,
    StackscriptUpdateOptions,
)


class StackscriptClient(ABC):
    """Abstract StackScript API.

    Every method blocks until the call completes. Failures raise
    ``ApiError``; a missing entity raises ``NotFoundError``.
    """

    @abstractmethod
    def get_stackscript(self, stackscript_id: int) -> Stackscript:
        """Fetch one StackScript by ID."""

    @abstractmethod
    def create_stackscript(self, opts: StackscriptCreateOptions) -> Stackscript:
        """Create a StackScript and return it with its assigned ID."""

    @abstractmethod
    def update_stackscript(
        self, stackscript_id: int, opts: StackscriptUpdateOptions
    ) -> Stackscript:
        """Replace the settable fields of a StackScript."""

    @abstractmethod
    def delete_stackscript(self, stackscript_id: int) -> None:
        """Delete a StackScript."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"
