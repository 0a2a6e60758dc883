"""Audit log viewing endpoint.

- GET /api/logs - Recent install attempts (newest first, max 100)

Routes mounted at: /api/logs
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Depends, HTTPException, Query

from skill_permissions.api.deps import AuditLoggerDep
from skill_permissions.api.schemas import LogsResponse
from skill_permissions.api.security import require_admin
from skill_permissions.constants import MAX_LOG_ENTRIES
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
def get_logs(
    audit: AuditLoggerDep,
    limit: int = Query(default=MAX_LOG_ENTRIES, ge=1, le=MAX_LOG_ENTRIES, description="Max entries"),
) -> LogsResponse:
    """Get recent install attempts. Malformed log lines are skipped."""
    try:
        entries = audit.read_recent(limit)
    except OSError as e:
        logger.error(
            {
                "event": "audit_read_failed",
                "message": f"Failed to read audit log: {e}",
                "component": "api",
                "error_type": type(e).__name__,
                "details": {"path": str(audit.log_path)},
            }
        )
        raise HTTPException(status_code=500, detail="Failed to read logs")

    return LogsResponse(logs=entries)
