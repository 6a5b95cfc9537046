"""
Tests for CLI commands — lifecycle commands, state handling and global options.
"""

import json
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from linode_provider.core.persistence.state_file import load_state
from linode_provider.main import cli

KIND = "linode_stackscript"


@pytest.fixture
def resource_file(tmp_path: Path) -> Path:
    path = tmp_path / "setup.yml"
    path.write_text(textwrap.dedent("""\
        label: setup
        description: Installs the basics
        script: |
          #!/bin/bash
          apt-get update
        images:
          - linode/debian11
    """))
    return path


@pytest.fixture
def run(table, tmp_path: Path):
    """Invoke the CLI against the mock-backed table and a temp state file."""
    state_path = tmp_path / ".state" / "resources.json"
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(
            cli, ["--state", str(state_path), *args], obj={"provider": table}
        )

    _run.state_path = state_path
    return _run


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Linode provider" in result.output
        for command in ("schema", "create", "refresh", "update", "delete", "import", "show"):
            assert command in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestSchemaCommand:
    def test_schema_without_token(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("LINODE_TOKEN", raising=False)
        result = CliRunner().invoke(cli, ["schema", KIND])
        assert result.exit_code == 0
        assert "label" in result.output
        assert "force new" in result.output

    def test_schema_json(self, run):
        result = run("schema", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[KIND]["is_public"]["force_new"] is True
        assert data[KIND]["username"]["computed"] is True

    def test_unknown_kind(self, run):
        result = run("schema", "linode_instance")
        assert result.exit_code == 1
        assert "Unknown resource kind" in result.output


class TestLifecycleCommands:
    def test_create(self, run, resource_file):
        result = run("create", KIND, "setup", "--file", str(resource_file))
        assert result.exit_code == 0, result.output
        assert "Created linode_stackscript.setup (id 123)" in result.output

        record = load_state(run.state_path).get(KIND, "setup")
        assert record.id == "123"
        assert record.attributes["images"] == ["linode/debian11"]
        assert record.attributes["username"] == "mock-user"

    def test_create_twice_refused(self, run, resource_file):
        run("create", KIND, "setup", "--file", str(resource_file))
        result = run("create", KIND, "setup", "--file", str(resource_file))
        assert result.exit_code == 1
        assert "already exists in state" in result.output

    def test_create_invalid_file(self, run, tmp_path: Path):
        bad = tmp_path / "bad.yml"
        bad.write_text("label: x\n")
        result = run("create", KIND, "setup", "--file", str(bad))
        assert result.exit_code == 1
        assert "Invalid linode_stackscript configuration" in result.output
        assert load_state(run.state_path).resources == {}

    def test_create_missing_file(self, run, tmp_path: Path):
        result = run("create", KIND, "setup", "--file", str(tmp_path / "nope.yml"))
        assert result.exit_code == 1
        assert "Resource file not found" in result.output

    def test_create_api_error(self, run, resource_file, mock_client):
        from linode_provider.client.errors import ApiError

        mock_client.set_failure("create_stackscript", ApiError(401, ["Invalid Token"]))
        result = run("create", KIND, "setup", "--file", str(resource_file))
        assert result.exit_code == 1
        assert "Error creating a Linode Stackscript: [401] Invalid Token" in result.output

    def test_refresh(self, run, resource_file, mock_client):
        run("create", KIND, "setup", "--file", str(resource_file))
        remote = mock_client.get_stackscript(123)
        mock_client.put(remote.model_copy(update={"deployments_total": 7}))

        result = run("refresh", KIND, "setup")
        assert result.exit_code == 0, result.output
        assert "Refreshed" in result.output
        record = load_state(run.state_path).get(KIND, "setup")
        assert record.attributes["deployments_total"] == 7

    def test_refresh_gone(self, run, resource_file, mock_client):
        run("create", KIND, "setup", "--file", str(resource_file))
        mock_client.remove(123)

        result = run("refresh", KIND, "setup")
        assert result.exit_code == 0
        assert "no longer exists" in result.output
        assert load_state(run.state_path).get(KIND, "setup") is None

    def test_refresh_not_in_state(self, run):
        result = run("refresh", KIND, "setup")
        assert result.exit_code == 1
        assert "is not in state" in result.output

    def test_update(self, run, resource_file, tmp_path: Path, mock_client):
        run("create", KIND, "setup", "--file", str(resource_file))
        changed = tmp_path / "changed.yml"
        changed.write_text(resource_file.read_text().replace("label: setup", "label: setup-v2"))

        result = run("update", KIND, "setup", "--file", str(changed))
        assert result.exit_code == 0, result.output
        assert "Updated" in result.output
        assert mock_client.get_stackscript(123).label == "setup-v2"
        assert load_state(run.state_path).get(KIND, "setup").attributes["label"] == "setup-v2"

    def test_update_cannot_unpublish(self, run, resource_file, tmp_path: Path):
        public = tmp_path / "public.yml"
        public.write_text(resource_file.read_text() + "is_public: true\n")
        run("create", KIND, "setup", "--file", str(public))

        result = run("update", KIND, "setup", "--file", str(resource_file))
        assert result.exit_code == 1
        assert "cannot be made private" in result.output
        assert load_state(run.state_path).get(KIND, "setup").attributes["is_public"] is True

    def test_delete(self, run, resource_file, mock_client):
        run("create", KIND, "setup", "--file", str(resource_file))
        result = run("delete", KIND, "setup")
        assert result.exit_code == 0, result.output
        assert "Deleted" in result.output
        assert mock_client.calls("delete_stackscript") == [123]
        assert load_state(run.state_path).resources == {}

    def test_delete_already_gone(self, run, resource_file, mock_client):
        run("create", KIND, "setup", "--file", str(resource_file))
        mock_client.remove(123)
        result = run("delete", KIND, "setup")
        assert result.exit_code == 0
        assert load_state(run.state_path).resources == {}

    def test_corrupt_id_in_state(self, run, resource_file):
        run("create", KIND, "setup", "--file", str(resource_file))
        raw = json.loads(run.state_path.read_text())
        raw["resources"]["linode_stackscript.setup"]["id"] = "12abc"
        run.state_path.write_text(json.dumps(raw))

        result = run("refresh", KIND, "setup")
        assert result.exit_code == 1
        assert "Error parsing Linode Stackscript ID 12abc as int" in result.output


class TestImportCommand:
    def test_import(self, run, mock_client):
        from linode_provider.core.models.stackscript import Stackscript

        mock_client.put(
            Stackscript(id=555, label="existing", script="#!/bin/sh", images=["linode/alpine3.18"])
        )
        result = run("import", KIND, "existing", "555")
        assert result.exit_code == 0, result.output
        assert "Imported linode_stackscript.existing (id 555)" in result.output
        record = load_state(run.state_path).get(KIND, "existing")
        assert record.attributes["label"] == "existing"

    def test_import_missing(self, run):
        result = run("import", KIND, "ghost", "404")
        assert result.exit_code == 1
        assert "Cannot import non-existent" in result.output

    def test_import_bad_id(self, run, mock_client):
        result = run("import", KIND, "x", "abc")
        assert result.exit_code == 1
        assert "Error parsing Linode Stackscript ID abc" in result.output
        assert mock_client.call_count == 0


class TestShowCommand:
    def test_empty(self, run):
        result = run("show")
        assert result.exit_code == 0
        assert "No resources in state" in result.output

    def test_lists_resources(self, run, resource_file):
        run("create", KIND, "setup", "--file", str(resource_file))
        result = run("show")
        assert result.exit_code == 0
        assert "linode_stackscript.setup" in result.output
        assert "id 123" in result.output

    def test_json(self, run, resource_file):
        run("create", KIND, "setup", "--file", str(resource_file))
        data = json.loads(run("show", "--json").output)
        assert data["linode_stackscript.setup"]["id"] == "123"


class TestProviderConfiguration:
    def test_missing_token(self, tmp_path: Path, monkeypatch, resource_file):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("LINODE_TOKEN", raising=False)
        result = CliRunner().invoke(cli, ["create", KIND, "setup", "--file", str(resource_file)])
        assert result.exit_code == 1
        assert "No Linode API token configured" in result.output

    def test_mock_flag(self, tmp_path: Path, monkeypatch, resource_file):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("LINODE_TOKEN", raising=False)
        result = CliRunner().invoke(
            cli, ["--mock", "create", KIND, "setup", "--file", str(resource_file)]
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / ".state" / "resources.json").is_file()
