"""
Linode provider — CLI entrypoint.

Usage:
    python -m linode_provider.main --help
    python -m linode_provider.main schema linode_stackscript
    python -m linode_provider.main create linode_stackscript setup --file setup.yml
"""

from __future__ import annotations

import os
from pathlib import Path

import click

from linode_provider import __version__
from linode_provider.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="linode-provider")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to provider.yml (default: auto-detect).",
)
@click.option(
    "--state",
    "state_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to the state file (default: .state/resources.json).",
)
@click.option("--mock", is_flag=True, help="Use the in-memory mock API (no network).")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    state_path: str | None,
    mock: bool,
) -> None:
    """Linode provider — manage Linode resources through their drivers."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["state_path"] = Path(state_path) if state_path else None
    ctx.obj["mock"] = mock

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


# ── Register commands from linode_provider/ui/cli/ ──────────────

from linode_provider.ui.cli.resources import RESOURCE_COMMANDS  # noqa: E402

for _command in RESOURCE_COMMANDS:
    cli.add_command(_command)


if __name__ == "__main__":
    cli()
