"""Admin credential check and CORS handling for the HTTP API.

Admin endpoints require the `auth` query parameter to equal the configured
shared secret. An empty or unset secret disables admin endpoints entirely
(every admin request gets 401) instead of matching an empty parameter.

Every response carries permissive CORS headers; OPTIONS preflight requests
on any path are answered with 204 before routing.
"""

from __future__ import annotations

__all__ = [
    "CORS_HEADERS",
    "CorsMiddleware",
    "is_admin_secret",
    "require_admin",
]

import hmac

from fastapi import HTTPException, Query, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from skill_permissions.api.deps import StoreDep
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def is_admin_secret(provided: str | None, expected: str | None) -> bool:
    """Compare a submitted credential with the configured secret.

    Uses constant-time comparison. Always False when no secret is configured.

    Args:
        provided: Value of the `auth` query parameter.
        expected: Configured shared secret.

    Returns:
        True if the credential grants admin access.
    """
    if not expected or provided is None:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def require_admin(
    request: Request,
    store: StoreDep,
    auth: str | None = Query(default=None, description="Shared admin secret"),
) -> None:
    """Dependency guarding admin endpoints.

    Raises:
        HTTPException: 401 if the credential is missing, wrong, or admin
            endpoints are disabled (no secret configured).
    """
    if is_admin_secret(auth, store.snapshot().shared_secret):
        return

    logger.warning(
        {
            "event": "unauthorized_request_rejected",
            "message": f"Rejected unauthorized request: {request.method} {request.url.path}",
            "component": "api_security",
            "details": {"method": request.method, "path": str(request.url.path)},
        }
    )
    raise HTTPException(status_code=401, detail="Unauthorized")


class CorsMiddleware(BaseHTTPMiddleware):
    """Answer preflight requests and add CORS headers to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response
