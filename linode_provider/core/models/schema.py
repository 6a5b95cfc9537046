"""
Schema model — how a driver declares the attributes of its resource kind.

A schema maps attribute names to ``SchemaField`` descriptors. The
descriptor says what type the attribute has and who owns it: the user
(required / optional), the API (computed), or both.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

FieldType = Literal["string", "bool", "int", "list"]


class SchemaField(BaseModel):
    """One attribute of a resource schema."""

    type: FieldType
    description: str = ""
    required: bool = False
    optional: bool = False
    computed: bool = False
    force_new: bool = False     # changing it replaces the resource
    default: Any = None

    # list elements: a scalar type name, or a nested schema
    elem: FieldType | dict[str, SchemaField] | None = None

    @property
    def settable(self) -> bool:
        """Whether the user may set this attribute in configuration."""
        return self.required or self.optional

    def describe(self) -> dict[str, Any]:
        """Flat, JSON-friendly summary (used by the CLI)."""
        data: dict[str, Any] = {
            "type": self.type,
            "required": self.required,
            "optional": self.optional,
            "computed": self.computed,
        }
        if self.force_new:
            data["force_new"] = True
        if self.default is not None:
            data["default"] = self.default
        if isinstance(self.elem, dict):
            data["elem"] = {name: f.describe() for name, f in self.elem.items()}
        elif self.elem:
            data["elem"] = self.elem
        if self.description:
            data["description"] = self.description
        return data


class ResourceSchema(BaseModel):
    """The full attribute schema of one resource kind."""

    kind: str
    fields: dict[str, SchemaField] = Field(default_factory=dict)

    @property
    def settable_fields(self) -> list[str]:
        return [name for name, f in self.fields.items() if f.settable]

    @property
    def computed_fields(self) -> list[str]:
        return [name for name, f in self.fields.items() if f.computed]

    @property
    def required_fields(self) -> list[str]:
        return [name for name, f in self.fields.items() if f.required]

    def describe(self) -> dict[str, Any]:
        return {name: f.describe() for name, f in self.fields.items()}
