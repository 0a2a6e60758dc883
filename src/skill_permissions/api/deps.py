"""Shared dependencies for API routes.

FastAPI convention: deps.py contains reusable request dependencies.
The store and audit logger are bound to each request (request.state) by a
router-level dependency installed in create_api_router(), so the routes
work the same when mounted into a host app. app.state is the fallback.

Usage with Annotated:
    from skill_permissions.api.deps import StoreDep

    @router.get("")
    def get_config(store: StoreDep) -> ConfigResponse:
        ...
"""

from __future__ import annotations

__all__ = [
    "get_audit_logger",
    "get_store",
    "read_json_body",
    "AuditLoggerDep",
    "StoreDep",
]

import json
from typing import Annotated, Any, cast

from fastapi import Depends, HTTPException, Request

from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import InstallAttemptLogger


# =============================================================================
# Dependency Functions
# =============================================================================


def _lookup(request: Request, name: str) -> Any:
    value = getattr(request.state, name, None)
    if value is None:
        value = getattr(request.app.state, name, None)
    return value


def get_store(request: Request) -> PolicyStore:
    """Get PolicyStore bound to the request (or app.state).

    Raises:
        HTTPException: 503 if the store is not available.
    """
    store = _lookup(request, "policy_store")
    if store is None:
        raise HTTPException(status_code=503, detail="Policy store not available")
    return cast(PolicyStore, store)


def get_audit_logger(request: Request) -> InstallAttemptLogger:
    """Get InstallAttemptLogger bound to the request (or app.state).

    Raises:
        HTTPException: 503 if the audit logger is not available.
    """
    audit = _lookup(request, "audit_logger")
    if audit is None:
        raise HTTPException(status_code=503, detail="Audit log not available")
    return cast(InstallAttemptLogger, audit)


async def read_json_body(request: Request) -> Any:
    """Parse the request body as JSON.

    Read inside the handler (not as a FastAPI body parameter) so auth
    dependencies run first and malformed JSON gets a plain 400.

    Raises:
        HTTPException: 400 "Invalid JSON" if the body is not valid JSON.
    """
    raw = await request.body()
    try:
        return json.loads(raw or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON")


# =============================================================================
# Type Aliases for Annotated Pattern
# =============================================================================


StoreDep = Annotated[PolicyStore, Depends(get_store)]
AuditLoggerDep = Annotated[InstallAttemptLogger, Depends(get_audit_logger)]
