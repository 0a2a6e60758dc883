"""Shared fixtures for skill-permissions tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from skill_permissions.config import PolicyConfig
from skill_permissions.constants import (
    CONFIG_PATH_ENV_VAR,
    LOG_PATH_ENV_VAR,
    PASSWORD_ENV_VAR,
    PORT_ENV_VAR,
)
from skill_permissions.store import PolicyStore
from skill_permissions.telemetry.audit.install_logger import InstallAttemptLogger


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Policy file location inside the test's temp dir."""
    return tmp_path / "config" / "permissions.json"


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Audit log location inside the test's temp dir."""
    return tmp_path / "logs" / "skill-permissions.log"


@pytest.fixture(autouse=True)
def isolated_paths(monkeypatch: pytest.MonkeyPatch, config_path: Path, log_path: Path) -> None:
    """Never touch the real config dir or ~/.openclaw during tests."""
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(config_path))
    monkeypatch.setenv(LOG_PATH_ENV_VAR, str(log_path))
    monkeypatch.delenv(PASSWORD_ENV_VAR, raising=False)
    monkeypatch.delenv(PORT_ENV_VAR, raising=False)


@pytest.fixture
def make_store(config_path: Path) -> Callable[..., PolicyStore]:
    """Factory: PolicyStore persisting to the temp config path."""

    def _make(**fields: Any) -> PolicyStore:
        return PolicyStore(PolicyConfig(**fields), config_path)

    return _make


@pytest.fixture
def store(make_store: Callable[..., PolicyStore]) -> PolicyStore:
    """Store with allow list ["alice"], deny list ["eve"], deny default, secret "s3cret"."""
    return make_store(
        default_policy="deny",
        allowed_users=["alice"],
        denied_users=["eve"],
        shared_secret="s3cret",
    )


@pytest.fixture
def audit(store: PolicyStore, log_path: Path) -> InstallAttemptLogger:
    """Audit logger bound to the store fixture."""
    return InstallAttemptLogger(log_path, store.snapshot)
