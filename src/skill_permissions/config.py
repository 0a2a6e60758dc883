"""Policy configuration for skill-permissions.

The effective policy is merged per field from three sources, highest
priority first:
    1. Host-supplied plugin configuration (HostConfig)
    2. The persisted policy file (permissions.json)
    3. Hard-coded defaults (deny by default, empty lists, logging on)

Only the mutable subset (lists, default policy, logging flag) is ever
written back. The shared secret and listen port are read-only.

Example usage:
    loaded = load_policy_file(config_path)
    policy = merge_policy(host_config, loaded)
    save_policy(policy, config_path)
"""

from __future__ import annotations

__all__ = [
    "PERSISTED_FIELDS",
    "HostConfig",
    "PolicyConfig",
    "PolicyUpdate",
    "get_config_path",
    "get_log_path",
    "load_policy_file",
    "merge_policy",
    "save_policy",
]

import json
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from skill_permissions.constants import (
    CONFIG_PATH_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_PATH,
    LOG_PATH_ENV_VAR,
)
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

# Fields written by save_policy (field names, not JSON aliases)
PERSISTED_FIELDS: frozenset[str] = frozenset(
    {"allowed_users", "denied_users", "default_policy", "log_install_attempts"}
)


# =============================================================================
# Paths
# =============================================================================


def get_config_path() -> Path:
    """Get the policy file path ($SKILL_PERMISSIONS_CONFIG or OS config dir)."""
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


def get_log_path() -> Path:
    """Get the audit log path ($SKILL_PERMISSIONS_LOG or ~/.openclaw/logs)."""
    override = os.environ.get(LOG_PATH_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_LOG_PATH


# =============================================================================
# Models
# =============================================================================


def _dedupe(users: list[str]) -> list[str]:
    """Drop repeated entries, keeping first-seen order."""
    return list(dict.fromkeys(users))


class PolicyConfig(BaseModel):
    """Effective policy governing install decisions.

    JSON uses the camelCase names of the persisted file and the HTTP API.

    Attributes:
        default_policy: Decision when no list matches.
        allowed_users: Allow list (order kept for display only).
        denied_users: Deny list. Evaluated before the allow list.
        log_install_attempts: Whether decisions are written to the audit log.
        shared_secret: Credential for admin HTTP endpoints. Empty disables them.
        listen_port: Port for the standalone HTTP server.
    """

    default_policy: Literal["allow", "deny"] = Field(default="deny", alias="defaultPolicy")
    allowed_users: list[str] = Field(default_factory=list, alias="allowedUsers")
    denied_users: list[str] = Field(default_factory=list, alias="deniedUsers")
    log_install_attempts: bool = Field(default=True, alias="logInstallAttempts")
    shared_secret: str | None = Field(default=None, alias="password")
    listen_port: int | None = Field(default=None, alias="port", ge=1, le=65535)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("allowed_users", "denied_users")
    @classmethod
    def _unique_users(cls, value: list[str]) -> list[str]:
        return _dedupe(value)

    def mutable_view(self) -> dict[str, Any]:
        """Non-secret fields as camelCase JSON (what the API and tools expose)."""
        return self.model_dump(mode="json", by_alias=True, include=set(PERSISTED_FIELDS))

    def is_default(self) -> bool:
        """True when no list is populated and the default policy is allow.

        A deny default restricts every unlisted user, so it counts as
        configured even with empty lists.
        """
        return not self.allowed_users and not self.denied_users and self.default_policy == "allow"


class HostConfig(BaseModel):
    """Plugin configuration supplied by the host runtime.

    Every field is optional. A field that is present (not None) overrides
    both the persisted file and the defaults.
    """

    default_policy: Literal["allow", "deny"] | None = Field(default=None, alias="defaultPolicy")
    allowed_users: list[str] | None = Field(default=None, alias="allowedUsers")
    denied_users: list[str] | None = Field(default=None, alias="deniedUsers")
    log_install_attempts: bool | None = Field(default=None, alias="logInstallAttempts")
    shared_secret: str | None = Field(default=None, alias="password")
    listen_port: int | None = Field(default=None, alias="port", ge=1, le=65535)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# =============================================================================
# Load / Merge / Save
# =============================================================================


def load_policy_file(path: Path) -> dict[str, Any]:
    """Read the persisted policy file.

    A missing file is not an error. A file that cannot be read, is not valid
    JSON, or carries invalid values is treated as absent (logged, not raised).

    Args:
        path: Path to permissions.json.

    Returns:
        Validated fields present in the file, keyed by field name.
    """
    if not path.exists():
        return {}

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value is not an object")
        loaded = PolicyConfig.model_validate(data)
    except (OSError, ValueError, ValidationError) as e:
        # JSONDecodeError and ValidationError are both ValueErrors
        logger.warning(
            {
                "event": "policy_file_invalid",
                "message": f"Ignoring unreadable policy file, using defaults: {path}",
                "component": "policy_store",
                "error_type": type(e).__name__,
                "details": {"path": str(path)},
            }
        )
        return {}

    return loaded.model_dump(include=loaded.model_fields_set)


def merge_policy(
    host_config: HostConfig | Mapping[str, Any] | None,
    loaded: Mapping[str, Any],
) -> PolicyConfig:
    """Build the effective policy, field by field.

    Args:
        host_config: Host-supplied configuration (model or raw mapping).
        loaded: Fields read by load_policy_file().

    Returns:
        Effective PolicyConfig.

    Raises:
        ValidationError: If the host configuration is malformed.
    """
    if host_config is None:
        host = HostConfig()
    elif isinstance(host_config, HostConfig):
        host = host_config
    else:
        host = HostConfig.model_validate(dict(host_config))

    merged: dict[str, Any] = {}
    for name in PolicyConfig.model_fields:
        host_value = getattr(host, name)
        if host_value is not None:
            merged[name] = host_value
        elif loaded.get(name) is not None:
            merged[name] = loaded[name]

    return PolicyConfig.model_validate(merged)


def save_policy(policy: PolicyConfig, path: Path) -> None:
    """Persist the mutable subset of the policy atomically.

    Writes pretty-printed JSON to a temp file in the same directory, then
    renames it over the target so readers never see a partial file.

    Args:
        policy: Policy to save.
        path: Destination (permissions.json).

    Raises:
        OSError: If the directory or file cannot be written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(policy.mutable_view(), indent=2) + "\n"

    # Same directory keeps the rename on one filesystem
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".permissions_", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


class PolicyUpdate(BaseModel):
    """Partial update of the mutable policy fields.

    Absent fields are left unchanged. The shared secret and listen port
    cannot be changed at runtime, so they are not accepted here.
    """

    default_policy: Literal["allow", "deny"] | None = Field(default=None, alias="defaultPolicy")
    allowed_users: list[str] | None = Field(default=None, alias="allowedUsers")
    denied_users: list[str] | None = Field(default=None, alias="deniedUsers")
    log_install_attempts: bool | None = Field(default=None, alias="logInstallAttempts")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def changes(self) -> dict[str, Any]:
        """Fields present in the update, keyed by field name."""
        return self.model_dump(exclude_none=True)
