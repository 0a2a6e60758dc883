"""Serve commands for skill-permissions CLI.

- serve: standalone HTTP API (uvicorn)
- mcp:   MCP tools over stdio
"""

from pathlib import Path

import click
import uvicorn

from skill_permissions.config import HostConfig
from skill_permissions.constants import DEFAULT_API_HOST, DEFAULT_API_PORT, PASSWORD_ENV_VAR, PORT_ENV_VAR
from skill_permissions.plugin import register
from skill_permissions.telemetry.system.system_logger import configure_system_logger_file

system_log_option = click.option(
    "--system-log",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write system events to this JSONL file",
)


@click.command()
@click.option("--host", default=DEFAULT_API_HOST, show_default=True, help="Interface to bind")
@click.option(
    "--port",
    "-p",
    type=click.IntRange(1, 65535),
    envvar=PORT_ENV_VAR,
    show_envvar=True,
    help="Port (default: policy port or 8790)",
)
@click.option(
    "--password",
    envvar=PASSWORD_ENV_VAR,
    show_envvar=True,
    default=None,
    help="Shared secret for admin endpoints",
)
@system_log_option
def serve(host: str, port: int | None, password: str | None, system_log: Path | None) -> None:
    """Start the HTTP API server.

    Admin endpoints need a shared secret, passed with --password or
    $SKILL_PERMISSIONS_PASSWORD. Without one they answer 401. A "password"
    hand-written into the policy file also works, but it is dropped the
    next time the policy file is rewritten.
    """
    if system_log is not None:
        configure_system_logger_file(system_log)

    plugin = register(HostConfig(shared_secret=password, listen_port=port))
    listen_port = plugin.store.snapshot().listen_port or DEFAULT_API_PORT

    click.echo(f"Serving skill permissions API on http://{host}:{listen_port}", err=True)
    uvicorn.run(plugin.api_app, host=host, port=listen_port, log_level="info")


@click.command()
@system_log_option
def mcp(system_log: Path | None) -> None:
    """Run the MCP permission tools over stdio."""
    if system_log is not None:
        configure_system_logger_file(system_log)

    plugin = register()
    plugin.mcp.run()
