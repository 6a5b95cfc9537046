"""
StackScript models — the API's view of a StackScript.

``Stackscript`` is the entity descriptor returned by the API. The create
and update option models are the request payloads: they only carry the
user-settable subset of fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


def _drop_nulls(data: Any) -> Any:
    """Treat JSON nulls as absent so field defaults apply."""
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


class UserDefinedField(BaseModel):
    """A deployment-time parameter declared inside a StackScript body.

    The API returns the constraint fields as ``oneOf`` and ``manyOf``; the
    ``<UDF />`` tags inside a script spell them ``oneof`` and ``manyof``.
    """

    model_config = ConfigDict(populate_by_name=True)

    label: str = ""
    name: str = ""
    example: str = ""
    one_of: str = Field(default="", validation_alias=AliasChoices("oneOf", "oneof", "one_of"))
    many_of: str = Field(default="", validation_alias=AliasChoices("manyOf", "manyof", "many_of"))
    default: str = ""

    @model_validator(mode="before")
    @classmethod
    def _nulls_to_defaults(cls, data: Any) -> Any:
        return _drop_nulls(data)


class Stackscript(BaseModel):
    """A StackScript as returned by the API."""

    id: int
    label: str = ""
    script: str = ""
    description: str = ""
    rev_note: str = ""
    is_public: bool = False
    images: list[str] = Field(default_factory=list)
    user_defined_fields: list[UserDefinedField] = Field(default_factory=list)

    # ── Computed by the API ──────────────────────────────────────
    deployments_active: int = 0
    deployments_total: int = 0
    username: str = ""
    user_gravatar_id: str = ""
    created: datetime | None = None
    updated: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _nulls_to_defaults(cls, data: Any) -> Any:
        return _drop_nulls(data)


class StackscriptCreateOptions(BaseModel):
    """Request body for creating a StackScript."""

    label: str
    script: str
    description: str = ""
    is_public: bool = False
    rev_note: str = ""
    images: list[str] = Field(default_factory=list)


class StackscriptUpdateOptions(BaseModel):
    """Request body for updating a StackScript.

    Every settable field is sent on every update, never a partial patch.
    """

    label: str
    script: str
    description: str = ""
    is_public: bool = False
    rev_note: str = ""
    images: list[str] = Field(default_factory=list)
