"""Plugin initialization for host agent runtimes.

register() wires the shared core (policy store, audit log) to both
delivery surfaces and hands the HTTP routes to the host:

    plugin = register(host_config, registrar=host.register_routes)
    host.add_mcp_server(plugin.mcp)
    host.on_lifecycle_event(plugin.handle_event)

The host passes its route registrar in explicitly. When no registrar is
given the routes are simply not mounted (they remain available through
plugin.api_app for a standalone server).
"""

from __future__ import annotations

__all__ = [
    "RouteRegistrar",
    "SkillPermissionsPlugin",
    "register",
]

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI
from fastmcp import FastMCP

from skill_permissions.api import create_api_app, create_api_router
from skill_permissions.config import HostConfig, get_config_path, get_log_path
from skill_permissions.constants import ROUTE_NAMESPACE
from skill_permissions.hooks import HostEvent, handle_event
from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import InstallAttemptLogger
from skill_permissions.telemetry.system.system_logger import get_system_logger
from skill_permissions.tools import create_mcp_server

logger = get_system_logger()

# Host capability: registrar(namespace, router)
RouteRegistrar = Callable[[str, APIRouter], None]


@dataclass
class SkillPermissionsPlugin:
    """Everything a host needs after registration.

    Attributes:
        store: Shared policy store.
        audit: Shared audit log writer.
        mcp: FastMCP server with the permission tools.
        api_app: Standalone FastAPI app (for `skill-permissions serve`).
        routes_registered: Whether a host registrar accepted the routes.
    """

    store: PolicyStore
    audit: InstallAttemptLogger
    mcp: FastMCP
    api_app: FastAPI
    routes_registered: bool = False

    def handle_event(self, event: HostEvent | Mapping[str, Any]) -> bool:
        """Lifecycle hook entry point (see skill_permissions.hooks)."""
        return handle_event(event)


def register(
    host_config: HostConfig | Mapping[str, Any] | None = None,
    *,
    registrar: RouteRegistrar | None = None,
    config_path: Path | None = None,
    log_path: Path | None = None,
) -> SkillPermissionsPlugin:
    """Initialize the plugin.

    Args:
        host_config: Host-supplied configuration; present fields override
            the persisted file.
        registrar: Host capability for mounting HTTP routes, or None.
        config_path: Policy file (default: get_config_path()).
        log_path: Audit log file (default: get_log_path()).

    Returns:
        SkillPermissionsPlugin with both delivery surfaces built.
    """
    logger.info({"event": "plugin_loading", "message": "Skill permissions plugin loading", "component": "plugin"})

    store = PolicyStore.from_sources(host_config, config_path or get_config_path())
    audit = InstallAttemptLogger(log_path or get_log_path(), store.snapshot)

    policy = store.snapshot()
    logger.info(
        {
            "event": "policy_loaded",
            "message": (
                f"Default policy: {policy.default_policy}, "
                f"allowed users: {len(policy.allowed_users)}, "
                f"denied users: {len(policy.denied_users)}"
            ),
            "component": "plugin",
            "details": {
                "config_path": str(store.config_path),
                "log_path": str(audit.log_path),
                "admin_enabled": bool(policy.shared_secret),
            },
        }
    )

    plugin = SkillPermissionsPlugin(
        store=store,
        audit=audit,
        mcp=create_mcp_server(store, audit),
        api_app=create_api_app(store, audit),
    )

    if registrar is None:
        logger.info(
            {
                "event": "routes_not_registered",
                "message": "No route registrar provided - HTTP routes not mounted in host",
                "component": "plugin",
            }
        )
    else:
        try:
            registrar(ROUTE_NAMESPACE, create_api_router(store, audit))
        except Exception as e:
            logger.error(
                {
                    "event": "route_registration_failed",
                    "message": f"Host route registrar failed: {e}",
                    "component": "plugin",
                    "error_type": type(e).__name__,
                }
            )
        else:
            plugin.routes_registered = True
            logger.info(
                {
                    "event": "routes_registered",
                    "message": "Routes registered with host",
                    "component": "plugin",
                }
            )

    logger.info({"event": "plugin_ready", "message": "Skill permissions plugin ready", "component": "plugin"})
    return plugin
