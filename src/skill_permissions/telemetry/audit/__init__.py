"""Audit trail of install permission decisions."""

from skill_permissions.telemetry.audit.install_logger import (
    AuditRecord,
    InstallAttemptLogger,
)

__all__ = [
    "AuditRecord",
    "InstallAttemptLogger",
]
