"""FastAPI server for the permission check and admin API.

Endpoints:
- GET  /api/check          Permission check (public)
- GET  /api/config         Current policy (admin)
- PUT  /api/config         Update policy (admin)
- POST /api/users/allow    Allow a user (admin)
- POST /api/users/deny     Deny a user (admin)
- POST /api/users/remove   Remove a user from both lists (admin)
- GET  /api/logs           Recent install attempts (admin)

Every error body has the shape {"error": "..."}. Unknown paths and
unsupported methods both answer 404 {"error": "Not found"}. Paths match
exactly: a trailing slash is not redirected.
"""

from __future__ import annotations

__all__ = ["create_api_app", "create_api_router"]

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from skill_permissions import __version__
from skill_permissions.api.routes import check, config, logs, users
from skill_permissions.api.schemas import ErrorResponse
from skill_permissions.api.security import CorsMiddleware
from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import InstallAttemptLogger


def create_api_router(store: PolicyStore, audit: InstallAttemptLogger) -> APIRouter:
    """Build the API routes bound to a store and audit logger.

    The returned router can be included in any FastAPI app (standalone
    or a host's). It binds the store and audit logger to request.state,
    so it does not rely on the including app's state.

    Args:
        store: Policy store shared with the MCP tools.
        audit: Audit log writer shared with the MCP tools.

    Returns:
        APIRouter with all /api routes.
    """

    def bind_state(request: Request) -> None:
        request.state.policy_store = store
        request.state.audit_logger = audit

    router = APIRouter(dependencies=[Depends(bind_state)])
    router.include_router(check.router, prefix="/api/check", tags=["check"])
    router.include_router(config.router, prefix="/api/config", tags=["config"])
    router.include_router(users.router, prefix="/api/users", tags=["users"])
    router.include_router(logs.router, prefix="/api/logs", tags=["logs"])
    return router


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 405 is reported as 404: a path only exists for the methods it serves
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content=ErrorResponse(error="Not found").model_dump())
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump())


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(status_code=400, content=ErrorResponse(error=f"Invalid request: {errors}").model_dump())


def create_api_app(store: PolicyStore, audit: InstallAttemptLogger) -> FastAPI:
    """Create the standalone FastAPI application.

    Args:
        store: Policy store.
        audit: Audit log writer.

    Returns:
        FastAPI app with routes, error handlers and CORS handling.
    """
    app = FastAPI(
        title="Skill Permissions API",
        description="Decide and manage which users may install skills",
        version=__version__,
        redirect_slashes=False,
    )

    app.state.policy_store = store
    app.state.audit_logger = audit

    # Permissive CORS; preflight answered with 204 on any path
    app.add_middleware(CorsMiddleware)

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    app.include_router(create_api_router(store, audit))

    return app
