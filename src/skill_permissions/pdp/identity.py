"""User identity normalization.

Host runtimes prefix user ids with the messaging channel they came from
("whatsapp:+4917...", "telegram:12345"). Lists are written without the
prefix, so it is stripped before matching.
"""

from __future__ import annotations

__all__ = ["normalize_identity"]

from skill_permissions.constants import CHANNEL_PREFIXES


def normalize_identity(raw: str) -> str:
    """Strip one leading channel prefix from a user id.

    Case-sensitive and anchored at position 0. Only the first matching
    prefix is removed ("telegram:discord:x" -> "discord:x").

    Args:
        raw: User id as received from the caller.

    Returns:
        The id without its channel prefix, or unchanged if it has none.
    """
    for prefix in CHANNEL_PREFIXES:
        if raw.startswith(prefix):
            return raw[len(prefix) :]
    return raw
