"""
ProviderState — the local record of resources this provider manages.

Serialized to .state/resources.json. Each record is addressed as
``<kind>.<name>`` and caches the identifier plus the attributes from
the last successful operation.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


def resource_address(kind: str, name: str) -> str:
    """The state key of a resource."""
    return f"{kind}.{name}"


class ResourceRecord(BaseModel):
    """Cached state of one managed resource."""

    kind: str
    name: str
    id: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    updated_at: str = Field(default_factory=_now_iso)

    @property
    def address(self) -> str:
        return resource_address(self.kind, self.name)


class ProviderState(BaseModel):
    """Root state model — serialized to .state/resources.json.

    Disposable: deleting it only forgets which remote entities are
    managed locally, nothing remote is touched.
    """

    # ── Schema ───────────────────────────────────────────────────
    schema_version: int = 1

    # ── Timestamps ───────────────────────────────────────────────
    created_at: str = Field(default_factory=_now_iso)
    updated_at: str = Field(default_factory=_now_iso)

    # ── Resources ────────────────────────────────────────────────
    resources: dict[str, ResourceRecord] = Field(default_factory=dict)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = _now_iso()

    def get(self, kind: str, name: str) -> ResourceRecord | None:
        return self.resources.get(resource_address(kind, name))

    def put(self, kind: str, name: str, resource_id: str, attributes: dict[str, Any]) -> None:
        """Record a resource, or forget it when the identifier is empty."""
        address = resource_address(kind, name)
        if not resource_id:
            self.resources.pop(address, None)
            return
        self.resources[address] = ResourceRecord(
            kind=kind,
            name=name,
            id=resource_id,
            attributes=attributes,
        )

    def remove(self, kind: str, name: str) -> None:
        self.resources.pop(resource_address(kind, name), None)
