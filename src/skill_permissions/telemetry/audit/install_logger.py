"""Install attempt audit log.

Every permission decision (from either delivery surface) is appended as one
JSON line to the audit log, unless logInstallAttempts is off:

    {"timestamp": "...", "userId": "whatsapp:+49...", "skillName": "weather",
     "allowed": true, "reason": "user is on the allowlist"}

The log never blocks a decision: write failures are reported to the system
logger and swallowed. Reads return the newest entries first and skip lines
that are not valid JSON (e.g. a partial trailing write after a crash).
"""

from __future__ import annotations

__all__ = [
    "AuditRecord",
    "InstallAttemptLogger",
]

import json
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from skill_permissions.config import PolicyConfig
from skill_permissions.constants import MAX_LOG_ENTRIES, UNKNOWN_SKILL
from skill_permissions.pdp.engine import Decision
from skill_permissions.telemetry.system.system_logger import get_system_logger

_system_logger = get_system_logger()


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AuditRecord(BaseModel):
    """One install decision, immutable once written.

    Attributes:
        timestamp: ISO 8601 time of the decision.
        user_id: User id as received (before normalization).
        skill_name: Skill the user tried to install.
        allowed: Decision outcome.
        reason: Decision reason.
    """

    timestamp: str = Field(default_factory=_utc_now_iso)
    user_id: str = Field(alias="userId")
    skill_name: str = Field(default=UNKNOWN_SKILL, alias="skillName")
    allowed: bool
    reason: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_decision(cls, user_id: str, skill_name: str, decision: Decision) -> "AuditRecord":
        """Build a record for a decision made just now."""
        return cls(
            user_id=user_id,
            skill_name=skill_name,
            allowed=decision.allowed,
            reason=decision.reason,
        )


class InstallAttemptLogger:
    """Appends and reads install decision records (JSONL).

    Usage:
        audit = InstallAttemptLogger(get_log_path(), store.snapshot)
        audit.record(AuditRecord.from_decision(user_id, skill, decision))
        recent = audit.read_recent()
    """

    def __init__(self, log_path: Path, policy_provider: Callable[[], PolicyConfig]) -> None:
        """Initialize the audit logger.

        Args:
            log_path: JSONL file to append to.
            policy_provider: Returns the current policy; consulted on every
                write so toggling logInstallAttempts takes effect immediately.
        """
        self.log_path = log_path
        self._policy_provider = policy_provider

    def record(self, entry: AuditRecord) -> bool:
        """Append one record if logging is enabled.

        Never raises on storage errors.

        Args:
            entry: Record to write.

        Returns:
            True if the record was written, False if disabled or failed.
        """
        if not self._policy_provider().log_install_attempts:
            return False

        line = json.dumps(entry.model_dump(by_alias=True)) + "\n"
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with self.log_path.open("a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            _system_logger.error(
                {
                    "event": "audit_write_failed",
                    "message": f"Could not write install attempt to {self.log_path}",
                    "component": "audit",
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "details": {"user_id": entry.user_id, "skill_name": entry.skill_name},
                }
            )
            return False
        return True

    def read_recent(self, limit: int = MAX_LOG_ENTRIES) -> list[dict[str, Any]]:
        """Read the newest records, newest first.

        Malformed lines are skipped and do not count towards the limit.

        Args:
            limit: Maximum records to return (capped at MAX_LOG_ENTRIES).

        Returns:
            Parsed records as dicts.

        Raises:
            OSError: If the log file exists but cannot be read.
        """
        limit = max(0, min(limit, MAX_LOG_ENTRIES))
        if not self.log_path.exists():
            return []

        content = self.log_path.read_text(encoding="utf-8", errors="replace")
        lines = [line for line in content.split("\n") if line.strip()]

        entries: list[dict[str, Any]] = []
        for line in reversed(lines):
            if len(entries) >= limit:
                break
            try:
                parsed = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(parsed, dict):
                entries.append(parsed)
        return entries
