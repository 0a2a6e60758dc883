"""Check command for skill-permissions CLI."""

import json
import sys

import click

from skill_permissions.cli.helpers import load_audit_logger, load_store
from skill_permissions.pep import check_install


@click.command()
@click.argument("user_id")
@click.option("--skill", "-s", default=None, help="Skill name to record in the audit log")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON")
def check(user_id: str, skill: str | None, as_json: bool) -> None:
    """Check whether USER_ID may install skills.

    The check is recorded in the audit log like any other.

    Exit codes:
        0: Allowed
        1: Denied
    """
    store = load_store()
    result = check_install(store, load_audit_logger(store), user_id, skill)

    if as_json:
        click.echo(json.dumps(result.to_json_dict(), indent=2))
    else:
        mark = "✓" if result.allowed else "✗"
        click.echo(f"{mark} {result.message}")

    sys.exit(0 if result.allowed else 1)
