"""HTTP delivery surface (FastAPI).

create_api_app() builds a standalone app; create_api_router() returns the
bare routes for hosts that mount them through an injected registrar.
"""

from skill_permissions.api.server import create_api_app, create_api_router

__all__ = ["create_api_app", "create_api_router"]
