"""skill-permissions: decide which users may install skills.

Exposes one permission decision through two surfaces:
- MCP tools for a host agent runtime (skill_permissions.tools)
- A small HTTP API (skill_permissions.api)

Both surfaces share the same decision engine, policy store and audit log.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
