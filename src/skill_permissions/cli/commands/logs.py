"""Logs command group for skill-permissions CLI."""

import json
import sys

import click

from skill_permissions.cli.helpers import load_audit_logger, load_store
from skill_permissions.constants import MAX_LOG_ENTRIES


@click.group()
def logs() -> None:
    """Audit log commands."""
    pass


@logs.command("show")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(1, MAX_LOG_ENTRIES),
    default=20,
    show_default=True,
    help="Number of entries",
)
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON records")
def logs_show(limit: int, as_json: bool) -> None:
    """Show recent install attempts (newest first)."""
    audit = load_audit_logger(load_store())
    try:
        entries = audit.read_recent(limit)
    except OSError as e:
        click.echo(f"✗ Failed to read {audit.log_path}: {e}", err=True)
        sys.exit(1)

    if not entries:
        click.echo("No install attempts recorded.")
        return

    for entry in entries:
        if as_json:
            click.echo(json.dumps(entry))
            continue
        outcome = "ALLOW" if entry.get("allowed") else "DENY"
        click.echo(
            f"{entry.get('timestamp', '?')}  {outcome:<5}  {entry.get('userId', '?')}  "
            f"{entry.get('skillName', '?')}  ({entry.get('reason', '')})"
        )


@logs.command("path")
def logs_path() -> None:
    """Show the audit log path."""
    click.echo(str(load_audit_logger(load_store()).log_path))
