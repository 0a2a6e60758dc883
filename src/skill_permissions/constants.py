"""Application-wide constants for skill-permissions.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

from pathlib import Path

from platformdirs import user_config_dir

APP_NAME: str = "skill-permissions"

# ============================================================================
# File Locations
# ============================================================================

# Environment overrides for file locations (tests, containers, host plugins)
CONFIG_PATH_ENV_VAR: str = "SKILL_PERMISSIONS_CONFIG"
LOG_PATH_ENV_VAR: str = "SKILL_PERMISSIONS_LOG"

# Host-config overrides for `skill-permissions serve`. The admin secret and
# port are never written to the policy file, so they come from here.
PASSWORD_ENV_VAR: str = "SKILL_PERMISSIONS_PASSWORD"
PORT_ENV_VAR: str = "SKILL_PERMISSIONS_PORT"

# Persisted policy file (mutable subset only).
# - macOS: ~/Library/Application Support/skill-permissions/permissions.json
# - Linux: ~/.config/skill-permissions/permissions.json
DEFAULT_CONFIG_PATH: Path = Path(user_config_dir(APP_NAME)) / "permissions.json"

# Audit log shared with the host agent runtime's log directory
DEFAULT_LOG_PATH: Path = Path.home() / ".openclaw" / "logs" / "skill-permissions.log"

# ============================================================================
# Identity Normalization
# ============================================================================

# Messaging-channel prefixes stripped from user ids before matching.
# Case-sensitive, matched at position 0 only, at most one is removed.
CHANNEL_PREFIXES: tuple[str, ...] = ("whatsapp:", "telegram:", "discord:")

# ============================================================================
# Decisions
# ============================================================================

REASON_DENYLIST: str = "user is on the denylist"
REASON_ALLOWLIST: str = "user is on the allowlist"
REASON_DEFAULT_ALLOW: str = "default policy: allow"
REASON_DEFAULT_DENY: str = "default policy: deny (allowlist-only)"

# Skill name recorded when the caller does not supply one
UNKNOWN_SKILL: str = "unknown"

# ============================================================================
# Audit Log
# ============================================================================

# Maximum audit records returned by a log read (newest first)
MAX_LOG_ENTRIES: int = 100

# ============================================================================
# HTTP API
# ============================================================================

# Port used by `skill-permissions serve` when the policy has no listen port
DEFAULT_API_PORT: int = 8790
DEFAULT_API_HOST: str = "127.0.0.1"

# Name under which the HTTP routes are handed to a host route registrar
ROUTE_NAMESPACE: str = APP_NAME

# ============================================================================
# MCP Tools
# ============================================================================

CHECK_TOOL_NAME: str = "skill_permission_check"
STATUS_TOOL_NAME: str = "skill_permission_status"

# ============================================================================
# Bootstrap Injection
# ============================================================================

# Bootstrap document that receives the permission instruction
BOOTSTRAP_DOCUMENT: str = "CLAUDE.md"
