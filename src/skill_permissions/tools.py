"""In-process delivery surface: MCP tools for the host agent runtime.

Tools:
- skill_permission_check(userId, skillName?) - Same decision and audit
  record as GET /api/check, returned as pretty-printed JSON text.
- skill_permission_status() - Current non-secret policy fields. Registered
  only when the policy at startup is non-default (a list is populated or
  the default policy is deny). Unlike GET /api/config this needs no secret.

Run standalone over stdio with `skill-permissions mcp`.
"""

__all__ = ["create_mcp_server"]

import json
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

from skill_permissions.constants import APP_NAME, CHECK_TOOL_NAME, STATUS_TOOL_NAME, UNKNOWN_SKILL
from skill_permissions.pep import check_install
from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import InstallAttemptLogger


def create_mcp_server(store: PolicyStore, audit: InstallAttemptLogger) -> FastMCP:
    """Create the FastMCP server exposing the permission tools.

    Args:
        store: Policy store shared with the HTTP API.
        audit: Audit log writer shared with the HTTP API.

    Returns:
        FastMCP server with the check tool (and the status tool when the
        policy is non-default).
    """
    mcp = FastMCP(name=APP_NAME)

    # Parameter names are the tool's public input schema
    @mcp.tool(
        name=CHECK_TOOL_NAME,
        description="Check whether a user may install skills. Call before every skill installation.",
    )
    def skill_permission_check(
        userId: Annotated[str, Field(description="User id (e.g. phone number or Telegram id)")],  # noqa: N803
        skillName: Annotated[str, Field(description="Name of the skill to install")] = UNKNOWN_SKILL,  # noqa: N803
    ) -> str:
        result = check_install(store, audit, userId, skillName)
        return json.dumps(result.to_json_dict(), indent=2)

    if not store.snapshot().is_default():

        @mcp.tool(
            name=STATUS_TOOL_NAME,
            description="Show the current skill installation permission settings.",
        )
        def skill_permission_status() -> str:
            return json.dumps(store.snapshot().mutable_view(), indent=2)

    return mcp
