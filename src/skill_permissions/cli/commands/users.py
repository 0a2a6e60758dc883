"""Users command group for skill-permissions CLI.

Same list semantics as the /api/users/* endpoints.
"""

import sys

import click

from skill_permissions.cli.helpers import load_store


@click.group()
def users() -> None:
    """Allow list / deny list management."""
    pass


@users.command("allow")
@click.argument("user_id")
def users_allow(user_id: str) -> None:
    """Add USER_ID to the allow list (and remove it from the deny list)."""
    try:
        load_store().allow_user(user_id)
    except OSError as e:
        click.echo(f"✗ Failed to save policy: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Allowed: {user_id}")


@users.command("deny")
@click.argument("user_id")
def users_deny(user_id: str) -> None:
    """Add USER_ID to the deny list (and remove it from the allow list)."""
    try:
        load_store().deny_user(user_id)
    except OSError as e:
        click.echo(f"✗ Failed to save policy: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Denied: {user_id}")


@users.command("remove")
@click.argument("user_id")
def users_remove(user_id: str) -> None:
    """Remove USER_ID from both lists."""
    try:
        load_store().remove_user(user_id)
    except OSError as e:
        click.echo(f"✗ Failed to save policy: {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Removed: {user_id}")


@users.command("list")
def users_list() -> None:
    """Show both lists."""
    policy = load_store().snapshot()
    click.echo(f"Default policy: {policy.default_policy}")
    click.echo("Allowed:")
    for user in policy.allowed_users:
        click.echo(f"  {user}")
    click.echo("Denied:")
    for user in policy.denied_users:
        click.echo(f"  {user}")
