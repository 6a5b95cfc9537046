"""
StackScript driver — ``linode_stackscript`` resources.

Maps the StackScript schema onto the client's create / get / update /
delete calls. Every settable attribute is sent on both create and
update. A StackScript that has disappeared remotely is dropped from the
snapshot on read and treated as already deleted on delete.
"""

from __future__ import annotations

import logging
from datetime import datetime

from linode_provider.client.base import StackscriptClient
from linode_provider.client.errors import ApiError, NotFoundError
from linode_provider.core.models.resource_data import StackscriptResourceData
from linode_provider.core.models.schema import ResourceSchema, SchemaField
from linode_provider.core.models.stackscript import (
    Stackscript,
    StackscriptCreateOptions,
    StackscriptUpdateOptions,
)
from linode_provider.resources.base import (
    InvalidClientError,
    ResourceDriver,
    ResourceError,
)

logger = logging.getLogger(__name__)

KIND = "linode_stackscript"

_UDF_SCHEMA: dict[str, SchemaField] = {
    "label": SchemaField(type="string", computed=True),
    "name": SchemaField(type="string", computed=True),
    "example": SchemaField(type="string", computed=True),
    "one_of": SchemaField(type="string", computed=True),
    "many_of": SchemaField(type="string", computed=True),
    "default": SchemaField(type="string", computed=True),
}

STACKSCRIPT_SCHEMA = ResourceSchema(
    kind=KIND,
    fields={
        "label": SchemaField(
            type="string",
            description="The StackScript's label is for display purposes only.",
            required=True,
        ),
        "script": SchemaField(
            type="string",
            description="The script to execute when provisioning a new Linode with this StackScript.",
            required=True,
        ),
        "description": SchemaField(
            type="string",
            description="A description for the StackScript.",
            required=True,
        ),
        "rev_note": SchemaField(
            type="string",
            description="This field allows you to add notes for the set of revisions made to this StackScript.",
            optional=True,
        ),
        "is_public": SchemaField(
            type="bool",
            description=(
                "This determines whether other users can use your StackScript. "
                "Once a StackScript is made public, it cannot be made private."
            ),
            optional=True,
            default=False,
            force_new=True,
        ),
        "images": SchemaField(
            type="list",
            elem="string",
            description=(
                "An array of Image IDs representing the Images that this "
                "StackScript is compatible for deploying with."
            ),
            required=True,
        ),
        "deployments_active": SchemaField(
            type="int",
            description="Count of currently active, deployed Linodes created from this StackScript.",
            computed=True,
        ),
        "user_gravatar_id": SchemaField(
            type="string",
            description="The Gravatar ID for the User who created the StackScript.",
            computed=True,
        ),
        "deployments_total": SchemaField(
            type="int",
            description="The total number of times this StackScript has been deployed.",
            computed=True,
        ),
        "username": SchemaField(
            type="string",
            description="The User who created the StackScript.",
            computed=True,
        ),
        "created": SchemaField(
            type="string",
            description="The date this StackScript was created.",
            computed=True,
        ),
        "updated": SchemaField(
            type="string",
            description="The date this StackScript was updated.",
            computed=True,
        ),
        "user_defined_fields": SchemaField(
            type="list",
            elem=_UDF_SCHEMA,
            description=(
                "This is a list of fields defined with a special syntax inside this "
                "StackScript that allow for supplying customized parameters during deployment."
            ),
            computed=True,
        ),
    },
)


class StackscriptDriver(ResourceDriver):
    """Lifecycle driver for StackScripts.

    Args:
        client: The StackScript API to reconcile against.

    Raises:
        InvalidClientError: ``client`` does not implement ``StackscriptClient``.
    """

    def __init__(self, client: StackscriptClient):
        if not isinstance(client, StackscriptClient):
            raise InvalidClientError(
                f"Invalid Client when creating {self.display_name}: "
                f"expected StackscriptClient, got {type(client).__name__}"
            )
        self._client = client

    @property
    def kind(self) -> str:
        return KIND

    @property
    def display_name(self) -> str:
        return "Linode Stackscript"

    @property
    def schema(self) -> ResourceSchema:
        return STACKSCRIPT_SCHEMA

    @property
    def data_model(self) -> type[StackscriptResourceData]:
        return StackscriptResourceData

    # ── Lifecycle ───────────────────────────────────────────────

    def create(self, data: StackscriptResourceData) -> StackscriptResourceData:
        opts = StackscriptCreateOptions(
            label=data.label,
            script=data.script,
            description=data.description,
            is_public=data.is_public,
            rev_note=data.rev_note,
            images=list(data.images),
        )

        logger.debug("Creating %s %r", self.display_name, data.label)
        try:
            stackscript = self._client.create_stackscript(opts)
        except ApiError as e:
            raise ResourceError(f"Error creating a {self.display_name}: {e}") from e

        data.id = str(stackscript.id)
        logger.info("Created %s %s", self.display_name, data.id)
        return self.read(data)

    def read(self, data: StackscriptResourceData) -> StackscriptResourceData:
        stackscript_id = self.parse_id(data.id)

        logger.debug("Reading %s %d", self.display_name, stackscript_id)
        try:
            stackscript = self._client.get_stackscript(stackscript_id)
        except NotFoundError:
            logger.warning(
                "removing StackScript ID %r from state because it no longer exists",
                data.id,
            )
            data.id = ""
            return data
        except ApiError as e:
            raise ResourceError(
                f"Error finding the specified {self.display_name}: {e}"
            ) from e

        _apply_remote(data, stackscript)
        return data

    def update(self, data: StackscriptResourceData) -> StackscriptResourceData:
        stackscript_id = self.parse_id(data.id)

        opts = StackscriptUpdateOptions(
            label=data.label,
            script=data.script,
            description=data.description,
            is_public=data.is_public,
            rev_note=data.rev_note,
            images=list(data.images),
        )

        logger.debug("Updating %s %d", self.display_name, stackscript_id)
        try:
            self._client.update_stackscript(stackscript_id, opts)
        except ApiError as e:
            raise ResourceError(
                f"Error updating {self.display_name} {stackscript_id}: {e}"
            ) from e

        return self.read(data)

    def delete(self, data: StackscriptResourceData) -> StackscriptResourceData:
        stackscript_id = self.parse_id(data.id)

        logger.debug("Deleting %s %d", self.display_name, stackscript_id)
        try:
            self._client.delete_stackscript(stackscript_id)
        except NotFoundError:
            logger.debug("%s %d already gone", self.display_name, stackscript_id)
        except ApiError as e:
            raise ResourceError(
                f"Error deleting {self.display_name} {stackscript_id}: {e}"
            ) from e

        data.id = ""
        return data

    def import_state(self, resource_id: str) -> StackscriptResourceData | None:
        # The ID is the only import key; everything else comes from the API.
        stackscript_id = self.parse_id(resource_id)

        try:
            stackscript = self._client.get_stackscript(stackscript_id)
        except NotFoundError:
            logger.warning(
                "Cannot import %s %d: it does not exist", self.display_name, stackscript_id
            )
            return None
        except ApiError as e:
            raise ResourceError(
                f"Error finding the specified {self.display_name}: {e}"
            ) from e

        return _snapshot_from(stackscript)


def _apply_remote(data: StackscriptResourceData, stackscript: Stackscript) -> None:
    """Copy every remote attribute, settable and computed, into the snapshot."""
    data.label = stackscript.label
    data.script = stackscript.script
    data.description = stackscript.description
    data.is_public = stackscript.is_public
    data.images = list(stackscript.images)
    data.rev_note = stackscript.rev_note

    # Computed
    data.deployments_active = stackscript.deployments_active
    data.deployments_total = stackscript.deployments_total
    data.username = stackscript.username
    data.user_gravatar_id = stackscript.user_gravatar_id
    data.created = _timestamp(stackscript.created)
    data.updated = _timestamp(stackscript.updated)
    data.user_defined_fields = [
        udf.model_copy() for udf in stackscript.user_defined_fields
    ]


def _snapshot_from(stackscript: Stackscript) -> StackscriptResourceData:
    data = StackscriptResourceData(
        id=str(stackscript.id),
        label=stackscript.label,
        script=stackscript.script,
        description=stackscript.description,
        images=list(stackscript.images),
    )
    _apply_remote(data, stackscript)
    return data


def _timestamp(value: datetime | None) -> str:
    return value.isoformat() if value is not None else ""
