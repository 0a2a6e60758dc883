"""Request and response schemas for the HTTP API.

JSON field names are camelCase, matching the persisted policy file.
"""

from __future__ import annotations

__all__ = [
    "ConfigResponse",
    "ErrorResponse",
    "LogsResponse",
    "UserRequest",
]

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from skill_permissions.config import PolicyConfig


class ConfigResponse(BaseModel):
    """Mutable policy fields (never the shared secret or port)."""

    default_policy: Literal["allow", "deny"] = Field(alias="defaultPolicy")
    allowed_users: list[str] = Field(alias="allowedUsers")
    denied_users: list[str] = Field(alias="deniedUsers")
    log_install_attempts: bool = Field(alias="logInstallAttempts")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_policy(cls, policy: PolicyConfig) -> "ConfigResponse":
        return cls.model_validate(policy.mutable_view())


class UserRequest(BaseModel):
    """Body of the /api/users/* endpoints."""

    user_id: str = Field(alias="userId", min_length=1)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LogsResponse(BaseModel):
    """Audit records, newest first."""

    logs: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
