"""Policy store - shared, single-writer policy state.

PolicyStore owns the effective PolicyConfig for the process lifetime.
Readers take a snapshot (an immutable reference); writers build a new
PolicyConfig and swap it in. Every mutation and its persistence run under
one lock, so concurrent admin requests cannot leave the file out of order
relative to memory.

Mutations keep the allow and deny lists disjoint: adding a user to one
list removes it from the other.
"""

from __future__ import annotations

__all__ = ["PolicyStore"]

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skill_permissions.config import (
    HostConfig,
    PolicyConfig,
    PolicyUpdate,
    load_policy_file,
    merge_policy,
    save_policy,
)
from skill_permissions.exceptions import PolicyValidationError
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()


class PolicyStore:
    """Holds the effective policy and persists every change.

    Attributes:
        config_path: Where mutations are persisted. None keeps the store
            in memory only.
    """

    def __init__(self, policy: PolicyConfig, config_path: Path | None = None) -> None:
        self._policy = policy
        self.config_path = config_path
        self._lock = threading.Lock()

    @classmethod
    def from_sources(
        cls,
        host_config: HostConfig | Mapping[str, Any] | None,
        config_path: Path,
    ) -> "PolicyStore":
        """Load the persisted file, merge host config over it, build a store."""
        policy = merge_policy(host_config, load_policy_file(config_path))
        return cls(policy, config_path)

    def snapshot(self) -> PolicyConfig:
        """Current policy. Never mutated in place, safe to hold across calls."""
        return self._policy

    # =========================================================================
    # Mutations
    # =========================================================================

    def allow_user(self, user_id: str) -> PolicyConfig:
        """Add a user to the allow list (removing it from the deny list)."""
        with self._lock:
            current = self._policy
            allowed = list(current.allowed_users)
            if user_id not in allowed:
                allowed.append(user_id)
            denied = [u for u in current.denied_users if u != user_id]
            return self._commit(
                current.model_copy(update={"allowed_users": allowed, "denied_users": denied}),
                event="user_allowed",
                details={"user_id": user_id},
            )

    def deny_user(self, user_id: str) -> PolicyConfig:
        """Add a user to the deny list (removing it from the allow list)."""
        with self._lock:
            current = self._policy
            denied = list(current.denied_users)
            if user_id not in denied:
                denied.append(user_id)
            allowed = [u for u in current.allowed_users if u != user_id]
            return self._commit(
                current.model_copy(update={"allowed_users": allowed, "denied_users": denied}),
                event="user_denied",
                details={"user_id": user_id},
            )

    def remove_user(self, user_id: str) -> PolicyConfig:
        """Remove a user from both lists."""
        with self._lock:
            current = self._policy
            return self._commit(
                current.model_copy(
                    update={
                        "allowed_users": [u for u in current.allowed_users if u != user_id],
                        "denied_users": [u for u in current.denied_users if u != user_id],
                    }
                ),
                event="user_removed",
                details={"user_id": user_id},
            )

    def update(self, changes: Mapping[str, Any]) -> PolicyConfig:
        """Overwrite the mutable fields present in a partial update.

        Accepts camelCase (API) or snake_case keys. Unknown keys, the shared
        secret and the listen port are ignored.

        When only one list is replaced, its entries are removed from the
        other list. When both are replaced and overlap, deny wins.

        Args:
            changes: Partial policy.

        Returns:
            The new policy.

        Raises:
            PolicyValidationError: If a present field has an invalid value.
                The store is left unchanged.
        """
        try:
            fields = PolicyUpdate.model_validate(dict(changes)).changes()
        except ValidationError as e:
            raise PolicyValidationError(str(e)) from e

        with self._lock:
            current = self._policy
            new = PolicyConfig.model_validate({**current.model_dump(), **fields})

            allowed, denied = new.allowed_users, new.denied_users
            if "allowed_users" in fields and "denied_users" not in fields:
                denied = [u for u in denied if u not in allowed]
            else:
                allowed = [u for u in allowed if u not in denied]
            new = new.model_copy(update={"allowed_users": allowed, "denied_users": denied})

            return self._commit(new, event="policy_updated", details={"fields": sorted(fields)})

    def _commit(self, new: PolicyConfig, *, event: str, details: dict[str, Any]) -> PolicyConfig:
        """Persist a new policy, then swap it in. Caller holds the lock.

        A failed save raises and leaves the current policy in place.
        """
        if self.config_path is not None:
            save_policy(new, self.config_path)
        self._policy = new
        logger.info(
            {
                "event": event,
                "message": f"Policy changed: {event}",
                "component": "policy_store",
                "details": details,
            }
        )
        return new
