"""
CLI commands for resource lifecycle operations.

Thin wrappers over ``DriverTable.execute``: each command loads state,
runs one operation, records the outcome and prints it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from linode_provider.core.config.loader import (
    ConfigError,
    find_provider_file,
    load_provider_config,
    load_resource_config,
)
from linode_provider.core.models.receipt import Receipt
from linode_provider.core.models.state import ProviderState, ResourceRecord
from linode_provider.core.persistence.state_file import (
    default_state_path,
    load_state,
    save_state,
)
from linode_provider.resources.registry import DriverTable


def _fail(message: str) -> NoReturn:
    click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def _provider(ctx: click.Context) -> DriverTable:
    """The driver table for this invocation (injected, or built from config)."""
    table: DriverTable | None = ctx.obj.get("provider")
    if table is not None:
        return table

    from linode_provider.provider import build_provider

    try:
        config = load_provider_config(ctx.obj.get("config_path"))
        if ctx.obj.get("mock"):
            config.mock = True
        table = build_provider(config)
    except ConfigError as e:
        _fail(str(e))
    ctx.obj["provider"] = table
    return table


def _state_path(ctx: click.Context) -> Path:
    explicit: Path | None = ctx.obj.get("state_path")
    if explicit is not None:
        return explicit
    config_path: Path | None = ctx.obj.get("config_path") or find_provider_file()
    root = config_path.parent.resolve() if config_path else Path.cwd()
    return default_state_path(root)


def _check_kind(table: DriverTable, kind: str) -> None:
    if kind not in table:
        _fail(f"Unknown resource kind '{kind}'. Known: {', '.join(table.kinds())}")


def _require_record(state: ProviderState, kind: str, name: str) -> ResourceRecord:
    record = state.get(kind, name)
    if record is None:
        _fail(f"{kind}.{name} is not in state")
    return record


def _check(receipt: Receipt) -> None:
    if receipt.failed:
        _fail(receipt.error or "operation failed")


def _print_attributes(attributes: dict[str, Any]) -> None:
    for key, value in attributes.items():
        if key == "script":
            lines = str(value).count("\n") + 1
            value = f"<{lines} line(s)>"
        elif isinstance(value, list) and value and isinstance(value[0], dict):
            value = f"<{len(value)} item(s)>"
        click.echo(f"      {key:<22} {value}")


# ── Schema ──────────────────────────────────────────────────────


@click.command("schema")
@click.argument("kind", required=False)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def schema(ctx: click.Context, kind: str | None, as_json: bool) -> None:
    """Show the attribute schema of one or all resource kinds."""
    table: DriverTable | None = ctx.obj.get("provider")
    if table is None:
        # Schemas don't depend on the client, so no token is needed here
        from linode_provider.client.mock import MockClient
        from linode_provider.provider import build_provider

        table = build_provider(client=MockClient())

    if kind:
        _check_kind(table, kind)
    kinds = [kind] if kind else table.kinds()
    schemas = {k: table.schema(k).describe() for k in kinds}

    if as_json:
        click.echo(json.dumps(schemas, indent=2))
        return

    for k, fields in schemas.items():
        click.secho(f"\n📋 {k}", fg="cyan", bold=True)
        for name, info in fields.items():
            if info["required"]:
                mode, color = "required", "green"
            elif info["optional"]:
                mode, color = "optional", "white"
            else:
                mode, color = "computed", "yellow"
            extra = " (force new)" if info.get("force_new") else ""
            click.echo(f"   {name:<22} {info['type']:<7} ", nl=False)
            click.secho(f"{mode}{extra}", fg=color)
    click.echo()


# ── Lifecycle ───────────────────────────────────────────────────


@click.command("create")
@click.argument("kind")
@click.argument("name")
@click.option(
    "--file", "-f", "file_path",
    type=click.Path(exists=False), required=True,
    help="YAML file with the resource attributes.",
)
@click.pass_context
def create(ctx: click.Context, kind: str, name: str, file_path: str) -> None:
    """Create a resource from a YAML attribute file."""
    table = _provider(ctx)
    _check_kind(table, kind)

    path = _state_path(ctx)
    state = load_state(path)
    if state.get(kind, name) is not None:
        _fail(f"{kind}.{name} already exists in state; use 'update'")

    try:
        config = load_resource_config(Path(file_path))
    except ConfigError as e:
        _fail(str(e))

    receipt = table.execute(kind, "create", config=config)
    _check(receipt)

    state.put(kind, name, receipt.resource_id, receipt.attributes)
    save_state(state, path)
    click.secho(f"✅ Created {kind}.{name} (id {receipt.resource_id})", fg="green")


@click.command("refresh")
@click.argument("kind")
@click.argument("name")
@click.pass_context
def refresh(ctx: click.Context, kind: str, name: str) -> None:
    """Re-read a resource and update its cached attributes."""
    table = _provider(ctx)
    _check_kind(table, kind)

    path = _state_path(ctx)
    state = load_state(path)
    record = _require_record(state, kind, name)

    receipt = table.execute(
        kind, "read", attributes=record.attributes, resource_id=record.id
    )
    _check(receipt)

    state.put(kind, name, receipt.resource_id, receipt.attributes)
    save_state(state, path)
    if receipt.gone:
        click.secho(
            f"⚠️  {kind}.{name} (id {record.id}) no longer exists — removed from state",
            fg="yellow",
        )
        return
    click.secho(f"🔄 Refreshed {kind}.{name} (id {receipt.resource_id})", fg="green")
    if not ctx.obj.get("quiet"):
        _print_attributes(receipt.attributes)


@click.command("update")
@click.argument("kind")
@click.argument("name")
@click.option(
    "--file", "-f", "file_path",
    type=click.Path(exists=False), required=True,
    help="YAML file with the resource attributes.",
)
@click.pass_context
def update(ctx: click.Context, kind: str, name: str, file_path: str) -> None:
    """Push every attribute in a YAML file to an existing resource."""
    table = _provider(ctx)
    _check_kind(table, kind)

    path = _state_path(ctx)
    state = load_state(path)
    record = _require_record(state, kind, name)

    try:
        config = load_resource_config(Path(file_path))
    except ConfigError as e:
        _fail(str(e))

    receipt = table.execute(kind, "update", config=config, resource_id=record.id)
    _check(receipt)

    state.put(kind, name, receipt.resource_id, receipt.attributes)
    save_state(state, path)
    if receipt.gone:
        click.secho(f"⚠️  {kind}.{name} vanished during update — removed from state", fg="yellow")
        return
    click.secho(f"✅ Updated {kind}.{name} (id {receipt.resource_id})", fg="green")


@click.command("delete")
@click.argument("kind")
@click.argument("name")
@click.pass_context
def delete(ctx: click.Context, kind: str, name: str) -> None:
    """Delete a resource and forget it."""
    table = _provider(ctx)
    _check_kind(table, kind)

    path = _state_path(ctx)
    state = load_state(path)
    record = _require_record(state, kind, name)

    receipt = table.execute(
        kind, "delete", attributes=record.attributes, resource_id=record.id
    )
    _check(receipt)

    state.remove(kind, name)
    save_state(state, path)
    click.secho(f"🗑️  Deleted {kind}.{name} (id {record.id})", fg="green")


@click.command("import")
@click.argument("kind")
@click.argument("name")
@click.argument("resource_id")
@click.pass_context
def import_(ctx: click.Context, kind: str, name: str, resource_id: str) -> None:
    """Adopt an existing remote resource by ID."""
    table = _provider(ctx)
    _check_kind(table, kind)

    path = _state_path(ctx)
    state = load_state(path)
    if state.get(kind, name) is not None:
        _fail(f"{kind}.{name} already exists in state")

    receipt = table.execute(kind, "import", resource_id=resource_id)
    _check(receipt)
    if receipt.gone:
        _fail(f"Cannot import non-existent {kind} {resource_id}")

    state.put(kind, name, receipt.resource_id, receipt.attributes)
    save_state(state, path)
    click.secho(f"📥 Imported {kind}.{name} (id {receipt.resource_id})", fg="green")


# ── Observe ─────────────────────────────────────────────────────


@click.command("show")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """List resources recorded in state."""
    state = load_state(_state_path(ctx))

    if as_json:
        data = {addr: rec.model_dump(mode="json") for addr, rec in state.resources.items()}
        click.echo(json.dumps(data, indent=2))
        return

    if not state.resources:
        click.echo("📁 No resources in state")
        return

    click.secho(f"📦 Resources ({len(state.resources)}):", fg="cyan", bold=True)
    for address, record in sorted(state.resources.items()):
        click.echo(f"   {address:<40} id {record.id}")
        if ctx.obj.get("verbose"):
            _print_attributes(record.attributes)


RESOURCE_COMMANDS = [schema, create, refresh, update, delete, import_, show]
