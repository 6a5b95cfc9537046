"""
Tests for data models — state records, snapshots and the schema model.
"""

import pytest
from pydantic import ValidationError

from linode_provider.core.models.resource_data import StackscriptResourceData
from linode_provider.core.models.schema import ResourceSchema, SchemaField
from linode_provider.core.models.stackscript import Stackscript, UserDefinedField
from linode_provider.core.models.state import ProviderState, resource_address

KIND = "linode_stackscript"


# ── ProviderState ────────────────────────────────────────────────────


class TestProviderState:
    def test_defaults(self):
        state = ProviderState()
        assert state.schema_version == 1
        assert state.resources == {}
        assert state.created_at != ""

    def test_address(self):
        assert resource_address(KIND, "setup") == "linode_stackscript.setup"

    def test_put_and_get(self):
        state = ProviderState()
        state.put(KIND, "setup", "5", {"label": "setup"})
        record = state.get(KIND, "setup")
        assert record.address == "linode_stackscript.setup"
        assert record.attributes == {"label": "setup"}

    def test_put_empty_id_forgets(self):
        state = ProviderState()
        state.put(KIND, "setup", "5", {})
        state.put(KIND, "setup", "", {})
        assert state.get(KIND, "setup") is None

    def test_remove_missing_is_noop(self):
        state = ProviderState()
        state.remove(KIND, "never-there")
        assert state.resources == {}

    def test_serialization_roundtrip(self):
        state = ProviderState()
        state.put(KIND, "a", "1", {"images": ["linode/x"]})
        restored = ProviderState.model_validate(state.model_dump(mode="json"))
        assert restored.get(KIND, "a").id == "1"


# ── Snapshots ────────────────────────────────────────────────────────


class TestStackscriptResourceData:
    def test_required_fields(self):
        with pytest.raises(ValidationError):
            StackscriptResourceData(label="x", script="#!/bin/sh")

    def test_defaults(self):
        data = StackscriptResourceData(label="l", script="s", description="", images=[])
        assert data.id == ""
        assert not data.exists
        assert data.is_public is False
        assert data.rev_note == ""

    def test_assignment_is_validated(self):
        data = StackscriptResourceData(label="l", script="s", description="", images=[])
        with pytest.raises(ValidationError):
            data.images = "linode/debian11"

    def test_attributes_exclude_id(self):
        data = StackscriptResourceData(
            id="9",
            label="l",
            script="s",
            description="",
            images=["linode/a"],
            user_defined_fields=[UserDefinedField(name="x", one_of="a,b")],
        )
        attrs = data.attributes()
        assert "id" not in attrs
        assert attrs["user_defined_fields"][0]["one_of"] == "a,b"

    def test_config_subset(self):
        data = StackscriptResourceData(
            id="9", label="l", script="s", description="d", images=["linode/a"], username="u"
        )
        assert set(data.config().model_dump()) == {
            "label", "script", "description", "rev_note", "is_public", "images",
        }


# ── API entity ───────────────────────────────────────────────────────


class TestStackscript:
    def test_udf_wire_names(self):
        ss = Stackscript.model_validate({
            "id": 1,
            "user_defined_fields": [{"name": "size", "oneOf": "s,m", "manyOf": "a,b"}],
        })
        udf = ss.user_defined_fields[0]
        assert udf.one_of == "s,m"
        assert udf.many_of == "a,b"

    def test_udf_tag_spelling(self):
        udf = UserDefinedField.model_validate({"name": "size", "oneof": "s,m", "manyof": "a,b"})
        assert udf.one_of == "s,m"
        assert udf.many_of == "a,b"

    def test_udf_nulls(self):
        udf = UserDefinedField.model_validate({"name": "n", "default": None, "oneOf": None})
        assert udf.default == ""
        assert udf.one_of == ""

    def test_null_scalars_use_defaults(self):
        ss = Stackscript.model_validate(
            {"id": 1, "label": None, "images": None, "deployments_total": None}
        )
        assert ss.label == ""
        assert ss.images == []
        assert ss.deployments_total == 0

    def test_ignores_unknown_fields(self):
        ss = Stackscript.model_validate({"id": 1, "mine": True, "ordinal": 3})
        assert ss.id == 1

    def test_null_timestamps(self):
        ss = Stackscript.model_validate({"id": 1, "created": None})
        assert ss.created is None


# ── Schema ───────────────────────────────────────────────────────────


class TestSchema:
    def test_settable(self):
        assert SchemaField(type="string", required=True).settable
        assert SchemaField(type="string", optional=True).settable
        assert not SchemaField(type="string", computed=True).settable

    def test_describe(self):
        field = SchemaField(type="bool", optional=True, default=False, force_new=True)
        assert field.describe() == {
            "type": "bool",
            "required": False,
            "optional": True,
            "computed": False,
            "force_new": True,
            "default": False,
        }

    def test_nested_describe(self):
        schema = ResourceSchema(
            kind="k",
            fields={
                "items": SchemaField(
                    type="list",
                    computed=True,
                    elem={"name": SchemaField(type="string", computed=True)},
                ),
            },
        )
        described = schema.describe()
        assert described["items"]["elem"]["name"]["computed"] is True
        assert schema.computed_fields == ["items"]
        assert schema.settable_fields == []
