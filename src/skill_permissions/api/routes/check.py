"""Permission check endpoint.

- GET /api/check?userId=...&skill=... - Decide and record an install attempt

Public: the caller is the agent runtime about to install a skill.

Routes mounted at: /api/check
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, HTTPException, Query

from skill_permissions.api.deps import AuditLoggerDep, StoreDep
from skill_permissions.pep import check_install

router = APIRouter()


@router.get("")
def check_permission(
    store: StoreDep,
    audit: AuditLoggerDep,
    user_id: str | None = Query(default=None, alias="userId"),
    skill: str | None = Query(default=None),
) -> dict[str, Any]:
    """Check whether a user may install a skill.

    Returns {userId, skill, allowed, reason, message}. The attempt is
    written to the audit log when logging is enabled.
    """
    if not user_id:
        raise HTTPException(status_code=400, detail="userId parameter required")

    return check_install(store, audit, user_id, skill).to_json_dict()
