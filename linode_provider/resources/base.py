"""
Resource driver base — the contract between the provider and one entity kind.

A driver declares the schema of its kind and reconciles local snapshots
with remote state through an injected API client. Drivers raise
``ResourceError`` on failure; the driver table turns those into failed
receipts for callers that prefer status values.

To create a new driver:
    1. Subclass ResourceDriver
    2. Implement kind, schema, data_model and the lifecycle operations
    3. Register it in the DriverTable built by ``build_provider``
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from linode_provider.core.models.resource_data import ResourceData
from linode_provider.core.models.schema import ResourceSchema

_INT_ID = re.compile(r"[+-]?[0-9]+")
_ID_MIN, _ID_MAX = -(2**63), 2**63 - 1


class ResourceError(Exception):
    """A lifecycle operation failed. The message is shown to the user verbatim."""


class InvalidIdError(ResourceError):
    """The local identifier is not a valid remote ID (corrupted local state)."""


class InvalidClientError(ResourceError):
    """The driver was handed a client that does not implement its API."""


class ResourceConfigError(ResourceError):
    """User configuration does not match the resource schema."""


class ResourceDriver(ABC):
    """Abstract base class for all resource drivers.

    Operations are synchronous and hold no state between calls; each one
    works only on the snapshot passed in and returns it.
    """

    @property
    @abstractmethod
    def kind(self) -> str:
        """The resource kind handled (e.g. ``'linode_stackscript'``)."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human name used in error messages (e.g. ``'Linode Stackscript'``)."""

    @property
    @abstractmethod
    def schema(self) -> ResourceSchema:
        """Attribute schema of this kind."""

    @property
    @abstractmethod
    def data_model(self) -> type[ResourceData]:
        """Snapshot model this driver reads and writes."""

    # ── Lifecycle ───────────────────────────────────────────────

    @abstractmethod
    def create(self, data: ResourceData) -> ResourceData:
        """Create the remote entity, set ``data.id`` and refresh."""

    @abstractmethod
    def read(self, data: ResourceData) -> ResourceData:
        """Refresh the snapshot. Clears ``data.id`` if the entity is gone."""

    @abstractmethod
    def update(self, data: ResourceData) -> ResourceData:
        """Push every settable attribute to the remote entity and refresh."""

    @abstractmethod
    def delete(self, data: ResourceData) -> ResourceData:
        """Delete the remote entity. Already gone counts as success."""

    @abstractmethod
    def import_state(self, resource_id: str) -> ResourceData | None:
        """Adopt an existing remote entity by ID, or None if it doesn't exist."""

    # ── Helpers ─────────────────────────────────────────────────

    def new_data(self, config: dict[str, Any], resource_id: str = "") -> ResourceData:
        """Build a validated snapshot from user configuration.

        Only settable attributes are accepted; computed ones are rejected
        so a config file can't fake remote state.

        Raises:
            ResourceConfigError: unknown, computed or invalid attributes.
        """
        settable = set(self.schema.settable_fields)
        unknown = sorted(k for k in config if k not in settable)
        if unknown:
            raise ResourceConfigError(
                f"Unsupported attributes for {self.kind}: {', '.join(unknown)}"
            )
        try:
            return self.data_model.model_validate({**config, "id": resource_id})
        except ValidationError as e:
            raise ResourceConfigError(f"Invalid {self.kind} configuration: {e}") from e

    def restore(self, attributes: dict[str, Any], resource_id: str) -> ResourceData:
        """Rebuild a snapshot from cached attributes, computed ones included.

        Raises:
            ResourceConfigError: the cached attributes no longer validate.
        """
        try:
            return self.data_model.model_validate({**attributes, "id": resource_id})
        except ValidationError as e:
            raise ResourceConfigError(
                f"Corrupt cached state for {self.kind} {resource_id}: {e}"
            ) from e

    def parse_id(self, resource_id: str) -> int:
        """A local identifier as an integer remote ID.

        Raises:
            InvalidIdError: the identifier is not a base-10 64-bit integer.
        """
        # int() alone would also accept "1_000" and surrounding whitespace
        if not _INT_ID.fullmatch(resource_id):
            reason = "empty identifier" if not resource_id else f"invalid syntax {resource_id!r}"
            raise InvalidIdError(
                f"Error parsing {self.display_name} ID {resource_id} as int: {reason}"
            )
        value = int(resource_id)
        if not _ID_MIN <= value <= _ID_MAX:
            raise InvalidIdError(
                f"Error parsing {self.display_name} ID {resource_id} as int: value out of range"
            )
        return value

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} kind={self.kind!r}>"
