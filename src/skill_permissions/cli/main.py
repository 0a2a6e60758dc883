"""Main CLI entry point for skill-permissions.

Defines the CLI group and registers all subcommands.

Commands:
    serve   - Start the HTTP API server
    mcp     - Run the MCP permission tools over stdio
    check   - Check whether a user may install skills
    users   - Allow list / deny list management (allow, deny, remove, list)
    config  - Policy configuration (show, path, set-default, logging)
    logs    - Audit log (show, path)

Usage:
    skill-permissions -h, --help      Show help message
    skill-permissions -v, --version   Show version
    skill-permissions check whatsapp:+491701234567 --skill weather
    skill-permissions users allow alice
    skill-permissions serve --port 8790
"""

import sys

import click

from skill_permissions import __version__

from .commands.check import check
from .commands.config import config
from .commands.logs import logs
from .commands.serve import mcp, serve
from .commands.users import users


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """skill-permissions: decide which users may install skills."""
    if version:
        click.echo(f"skill-permissions {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(serve)
cli.add_command(mcp)
cli.add_command(check)
cli.add_command(users)
cli.add_command(config)
cli.add_command(logs)


def main() -> None:
    """CLI entry point."""
    cli()
