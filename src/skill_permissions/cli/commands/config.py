"""Config command group for skill-permissions CLI."""

import json
import sys

import click

from skill_permissions.cli.helpers import load_store
from skill_permissions.config import get_config_path
from skill_permissions.exceptions import PolicyValidationError


@click.group()
def config() -> None:
    """Policy configuration commands."""
    pass


@config.command("show")
def config_show() -> None:
    """Display the effective policy (secret redacted)."""
    policy = load_store().snapshot()
    view = policy.mutable_view()
    view["adminEnabled"] = bool(policy.shared_secret)
    click.echo(json.dumps(view, indent=2))


@config.command("path")
def config_path_cmd() -> None:
    """Show the policy file path."""
    path = get_config_path()
    click.echo(str(path))

    if not path.exists():
        click.echo("(file does not exist - defaults are in effect)", err=True)


@config.command("set-default")
@click.argument("policy", type=click.Choice(["allow", "deny"]))
def config_set_default(policy: str) -> None:
    """Set the default policy for users on neither list."""
    try:
        load_store().update({"defaultPolicy": policy})
    except (PolicyValidationError, OSError) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Default policy: {policy}")


@config.command("logging")
@click.argument("state", type=click.Choice(["on", "off"]))
def config_logging(state: str) -> None:
    """Turn install attempt logging on or off."""
    try:
        load_store().update({"logInstallAttempts": state == "on"})
    except (PolicyValidationError, OSError) as e:
        click.echo(f"✗ {e}", err=True)
        sys.exit(1)
    click.echo(f"✓ Install attempt logging {state}")
