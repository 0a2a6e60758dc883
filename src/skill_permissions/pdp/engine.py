"""Permission decision engine.

Evaluation order (first match wins):
1. Normalize the user id (strip channel prefix)
2. Deny list match → DENY
3. Allow list match → ALLOW
4. No match → default policy

Deny is checked first, so a user on both lists is always denied.

Matching is bidirectional containment: an entry matches when it is a
substring of the id or the id is a substring of the entry. This lets
operators list a bare phone number or a fragment of a longer id.
Empty ids and empty entries never match.
"""

from __future__ import annotations

__all__ = [
    "Decision",
    "decide",
    "matches_any",
]

from collections.abc import Iterable
from dataclasses import dataclass

from skill_permissions.config import PolicyConfig
from skill_permissions.constants import (
    REASON_ALLOWLIST,
    REASON_DEFAULT_ALLOW,
    REASON_DEFAULT_DENY,
    REASON_DENYLIST,
)
from skill_permissions.pdp.identity import normalize_identity


@dataclass(frozen=True)
class Decision:
    """Outcome of a permission check.

    Attributes:
        allowed: Whether the install may proceed.
        reason: Human-readable explanation.
    """

    allowed: bool
    reason: str


def matches_any(identity: str, entries: Iterable[str]) -> bool:
    """Check a normalized id against list entries (bidirectional containment).

    Args:
        identity: Normalized user id.
        entries: Allow or deny list entries.

    Returns:
        True if any non-empty entry contains or is contained in the id.
    """
    if not identity:
        return False
    return any(entry and (entry in identity or identity in entry) for entry in entries)


def decide(raw_identity: str, policy: PolicyConfig) -> Decision:
    """Decide whether a user may install a skill.

    Pure: performs no I/O and never mutates the policy.

    Args:
        raw_identity: User id as received (channel prefix allowed).
        policy: Policy snapshot to evaluate against.

    Returns:
        Decision with allowed flag and reason.
    """
    identity = normalize_identity(raw_identity)

    if matches_any(identity, policy.denied_users):
        return Decision(allowed=False, reason=REASON_DENYLIST)

    if matches_any(identity, policy.allowed_users):
        return Decision(allowed=True, reason=REASON_ALLOWLIST)

    if policy.default_policy == "allow":
        return Decision(allowed=True, reason=REASON_DEFAULT_ALLOW)

    return Decision(allowed=False, reason=REASON_DEFAULT_DENY)
