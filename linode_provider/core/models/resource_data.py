"""
Resource data — the local snapshot a driver reads and writes.

``StackscriptConfig`` is what a user declares. ``StackscriptResourceData``
extends it with the local identifier and the computed attributes cached
from the last read. Validation happens when the model is built, so a
driver never sees a snapshot with a missing label or a non-list image set.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from linode_provider.core.models.stackscript import UserDefinedField


class ResourceData(BaseModel):
    """Base for every resource snapshot: an identifier and its attributes.

    ``id`` is the stringified remote identifier, or ``""`` while the
    resource does not exist (before create, or after it vanished).
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = ""

    @property
    def exists(self) -> bool:
        return self.id != ""

    def attributes(self) -> dict[str, Any]:
        """All attributes except the identifier, JSON-friendly."""
        return self.model_dump(mode="json", exclude={"id"})


class StackscriptConfig(BaseModel):
    """User-settable StackScript attributes."""

    label: str
    script: str
    description: str
    rev_note: str = ""
    is_public: bool = False
    images: list[str]


class StackscriptResourceData(ResourceData, StackscriptConfig):
    """Local snapshot of a StackScript: config plus cached computed state."""

    user_defined_fields: list[UserDefinedField] = Field(default_factory=list)
    deployments_active: int = 0
    deployments_total: int = 0
    username: str = ""
    user_gravatar_id: str = ""
    created: str = ""
    updated: str = ""

    def config(self) -> StackscriptConfig:
        """The settable subset of this snapshot."""
        return StackscriptConfig.model_validate(
            self.model_dump(include=set(StackscriptConfig.model_fields))
        )
