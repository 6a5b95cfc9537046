"""
Shared test fixtures and configuration.
"""

from pathlib import Path
from typing import Any

import pytest

from linode_provider.client.mock import MockClient
from linode_provider.core.models.resource_data import StackscriptResourceData
from linode_provider.provider import build_provider
from linode_provider.resources.registry import DriverTable
from linode_provider.resources.stackscript import StackscriptDriver


@pytest.fixture
def stackscript_config() -> dict[str, Any]:
    """Settable attributes of a simple StackScript."""
    return {
        "label": "setup",
        "script": "#!/bin/bash\necho hi",
        "description": "d",
        "images": ["linode/ubuntu20.04"],
        "is_public": False,
    }


@pytest.fixture
def mock_client() -> MockClient:
    """In-memory API that assigns IDs starting at 123."""
    return MockClient(first_id=123)


@pytest.fixture
def driver(mock_client: MockClient) -> StackscriptDriver:
    return StackscriptDriver(mock_client)


@pytest.fixture
def table(mock_client: MockClient) -> DriverTable:
    return build_provider(client=mock_client)


@pytest.fixture
def new_data(stackscript_config: dict[str, Any]):
    """Factory for fresh snapshots built from the default config."""

    def _make(**overrides: Any) -> StackscriptResourceData:
        return StackscriptResourceData(**{**stackscript_config, **overrides})

    return _make


@pytest.fixture
def tmp_state_dir(tmp_path: Path) -> Path:
    """Return a temporary directory for state files."""
    state_dir = tmp_path / "state"
    state_dir.mkdir()
    return state_dir
