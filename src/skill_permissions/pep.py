"""Policy Enforcement Point (PEP) - shared by both delivery surfaces.

The HTTP route (/api/check) and the MCP tool (skill_permission_check) both
translate their request shape into check_install(), so the same store state
always yields the same response body and the same audit record.
"""

from __future__ import annotations

__all__ = [
    "CheckResult",
    "check_install",
]

from pydantic import BaseModel, ConfigDict, Field

from skill_permissions.constants import UNKNOWN_SKILL
from skill_permissions.pdp.engine import decide
from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import AuditRecord, InstallAttemptLogger


class CheckResult(BaseModel):
    """Permission check response (identical on both surfaces).

    Attributes:
        user_id: User id as received.
        skill: Skill name (or "unknown").
        allowed: Decision outcome.
        reason: Decision reason.
        message: Sentence suitable for relaying to the user.
    """

    user_id: str = Field(serialization_alias="userId")
    skill: str
    allowed: bool
    reason: str
    message: str

    model_config = ConfigDict(frozen=True)

    def to_json_dict(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


def _message(skill_name: str, allowed: bool, reason: str) -> str:
    if allowed:
        return f'Installation of "{skill_name}" allowed.'
    return f'Installation of "{skill_name}" denied: {reason}'


def check_install(
    store: PolicyStore,
    audit: InstallAttemptLogger,
    user_id: str,
    skill_name: str | None = None,
) -> CheckResult:
    """Decide whether a user may install a skill and record the attempt.

    Args:
        store: Policy store (a snapshot is taken once per check).
        audit: Audit log writer. Write failures never affect the result.
        user_id: Raw user id (channel prefix allowed).
        skill_name: Skill being installed. Empty or None records "unknown".

    Returns:
        CheckResult for the caller.
    """
    skill = skill_name or UNKNOWN_SKILL
    decision = decide(user_id, store.snapshot())
    audit.record(AuditRecord.from_decision(user_id, skill, decision))

    return CheckResult(
        user_id=user_id,
        skill=skill,
        allowed=decision.allowed,
        reason=decision.reason,
        message=_message(skill, decision.allowed, decision.reason),
    )
