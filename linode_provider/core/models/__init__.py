"""
Domain models — Pydantic types for the provider.

All models are re-exported here for convenient access:

    from linode_provider.core.models import Stackscript, StackscriptResourceData, Receipt
"""

from linode_provider.core.models.receipt import Operation, Receipt
from linode_provider.core.models.resource_data import (
    ResourceData,
    StackscriptConfig,
    StackscriptResourceData,
)
from linode_provider.core.models.schema import ResourceSchema, SchemaField
from linode_provider.core.models.stackscript import (
    Stackscript,
    StackscriptCreateOptions,
    StackscriptUpdateOptions,
    UserDefinedField,
)
from linode_provider.core.models.state import (
    ProviderState,
    ResourceRecord,
    resource_address,
)

__all__ = [
    "Operation",
    "ProviderState",
    # receipt.py
    "Receipt",
    # resource_data.py
    "ResourceData",
    "ResourceRecord",
    # schema.py
    "ResourceSchema",
    "SchemaField",
    # stackscript.py
    "Stackscript",
    "StackscriptConfig",
    "StackscriptCreateOptions",
    "StackscriptResourceData",
    "StackscriptUpdateOptions",
    "UserDefinedField",
    # state.py
    "resource_address",
]
