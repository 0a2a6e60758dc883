"""Shared helpers for CLI commands."""

from __future__ import annotations

__all__ = ["load_audit_logger", "load_store"]

from skill_permissions.config import get_config_path, get_log_path
from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import InstallAttemptLogger


def load_store() -> PolicyStore:
    """Load the persisted policy (no host config on the command line)."""
    return PolicyStore.from_sources(None, get_config_path())


def load_audit_logger(store: PolicyStore) -> InstallAttemptLogger:
    """Audit logger for the default (or $SKILL_PERMISSIONS_LOG) path."""
    return InstallAttemptLogger(get_log_path(), store.snapshot)
