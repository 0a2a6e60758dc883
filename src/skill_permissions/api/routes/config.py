"""Policy configuration endpoints.

- GET /api/config - Current mutable policy fields
- PUT /api/config - Partial update; persisted immediately

The shared secret and listen port are never returned or changed here.

Routes mounted at: /api/config
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Depends, HTTPException, Request

from skill_permissions.api.deps import StoreDep, read_json_body
from skill_permissions.api.schemas import ConfigResponse
from skill_permissions.api.security import require_admin
from skill_permissions.exceptions import PolicyValidationError
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def get_config(store: StoreDep) -> ConfigResponse:
    """Get the current policy (lists, default policy, logging flag)."""
    return ConfigResponse.from_policy(store.snapshot())


@router.put("")
async def update_config(request: Request, store: StoreDep) -> ConfigResponse:
    """Overwrite the fields present in the body and persist.

    Body example: {"defaultPolicy": "allow", "deniedUsers": ["eve"]}
    """
    body = await read_json_body(request)
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Invalid configuration: expected a JSON object")

    try:
        policy = store.update(body)
    except PolicyValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid configuration: {e}")
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
