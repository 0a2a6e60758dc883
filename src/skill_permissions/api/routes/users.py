"""Single-user list management endpoints.

- POST /api/users/allow  - Add to allow list (removes from deny list)
- POST /api/users/deny   - Add to deny list (removes from allow list)
- POST /api/users/remove - Remove from both lists

Body: {"userId": "..."}. Each call persists the policy and returns the
updated configuration.

Routes mounted at: /api/users
"""

from __future__ import annotations

__all__ = ["router"]

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError

from skill_permissions.api.deps import StoreDep, read_json_body
from skill_permissions.api.schemas import ConfigResponse, UserRequest
from skill_permissions.api.security import require_admin
from skill_permissions.config import PolicyConfig
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

router = APIRouter(dependencies=[Depends(require_admin)])


# =============================================================================
# Helpers
# =============================================================================


async def _parse_user_id(request: Request) -> str:
    body = await read_json_body(request)
    try:
        return UserRequest.model_validate(body).user_id
    except ValidationError:
        raise HTTPException(status_code=400, detail="userId required")


def _apply(mutation: Callable[[str], PolicyConfig], user_id: str) -> ConfigResponse:
    try:
        policy = mutation(user_id)
    except OSError as e:
        logger.error(
            {
                "event": "policy_save_failed",
                "message": f"Failed to save policy: {e}",
                "component": "api",
                "error_type": type(e).__name__,
            }
        )
        raise HTTPException(status_code=500, detail="Failed to save config")
    return ConfigResponse.from_policy(policy)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/allow")
async def allow_user(request: Request, store: StoreDep) -> ConfigResponse:
    """Allow a user to install skills."""
    return _apply(store.allow_user, await _parse_user_id(request))


@router.post("/deny")
async def deny_user(request: Request, store: StoreDep) -> ConfigResponse:
    """Deny a user from installing skills."""
    return _apply(store.deny_user, await _parse_user_id(request))


@router.post("/remove")
async def remove_user(request: Request, store: StoreDep) -> ConfigResponse:
    """Remove a user from both lists (default policy applies again)."""
    return _apply(store.remove_user, await _parse_user_id(request))
