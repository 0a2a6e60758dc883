"""Unit tests for the skill-permissions CLI.

Tests CLI behavior using Click's CliRunner for isolated, fast testing.
The policy file and audit log live in the test's temp dir (see conftest).
Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from skill_permissions import __version__
from skill_permissions.cli import cli
from skill_permissions.constants import PASSWORD_ENV_VAR, PORT_ENV_VAR


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def policy_file(config_path: Path) -> Path:
    """Persisted policy: alice allowed, eve denied, deny default."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text(
        json.dumps(
            {
                "defaultPolicy": "deny",
                "allowedUsers": ["alice"],
                "deniedUsers": ["eve"],
                "logInstallAttempts": True,
                "password": "s3cret",
            }
        )
    )
    return config_path


class TestGroup:
    """Tests for the top-level group."""

    def test_version(self, runner: CliRunner):
        """--version prints the package version."""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_command(self, runner: CliRunner):
        """No subcommand prints help."""
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "check" in result.output


class TestCheckCommand:
    """Tests for `check`."""

    def test_allowed_exits_zero(self, runner: CliRunner, policy_file: Path, log_path: Path):
        """Given an allowed user, prints a check mark and exits 0."""
        # Act
        result = runner.invoke(cli, ["check", "whatsapp:alice", "--skill", "weather"])

        # Assert
        assert result.exit_code == 0
        assert '✓ Installation of "weather" allowed.' in result.output
        assert json.loads(log_path.read_text())["userId"] == "whatsapp:alice"

    def test_denied_exits_one(self, runner: CliRunner, policy_file: Path):
        """Given a denied user, prints a cross and exits 1."""
        result = runner.invoke(cli, ["check", "eve"])

        assert result.exit_code == 1
        assert "✗" in result.output
        assert "user is on the denylist" in result.output

    def test_json_output(self, runner: CliRunner, policy_file: Path):
        """--json prints the full result."""
        result = runner.invoke(cli, ["check", "bob", "--json"])

        data = json.loads(result.output)
        assert data["reason"] == "default policy: deny (allowlist-only)"
        assert data["skill"] == "unknown"

    def test_no_policy_file_uses_defaults(self, runner: CliRunner):
        """Without a policy file, the deny default applies."""
        result = runner.invoke(cli, ["check", "bob"])

        assert result.exit_code == 1


class TestUsersCommands:
    """Tests for `users`."""

    def test_allow_persists(self, runner: CliRunner, policy_file: Path):
        """users allow moves a denied user to the allow list."""
        result = runner.invoke(cli, ["users", "allow", "eve"])

        saved = json.loads(policy_file.read_text())
        assert result.exit_code == 0
        assert saved["allowedUsers"] == ["alice", "eve"]
        assert saved["deniedUsers"] == []

    def test_deny_persists(self, runner: CliRunner, policy_file: Path):
        """users deny moves an allowed user to the deny list."""
        runner.invoke(cli, ["users", "deny", "alice"])

        saved = json.loads(policy_file.read_text())
        assert saved["allowedUsers"] == []
        assert saved["deniedUsers"] == ["eve", "alice"]

    def test_remove_persists(self, runner: CliRunner, policy_file: Path):
        """users remove clears both lists."""
        runner.invoke(cli, ["users", "remove", "eve"])

        assert json.loads(policy_file.read_text())["deniedUsers"] == []

    def test_list(self, runner: CliRunner, policy_file: Path):
        """users list shows both lists."""
        result = runner.invoke(cli, ["users", "list"])

        assert "Default policy: deny" in result.output
        assert "  alice" in result.output
        assert "  eve" in result.output

    def test_save_failure_exits_one(self, runner: CliRunner, policy_file: Path):
        """Given an unwritable policy file, exits 1 with an error."""
        with patch("skill_permissions.store.save_policy", side_effect=OSError("read-only")):
            result = runner.invoke(cli, ["users", "allow", "bob"])

        assert result.exit_code == 1
        assert "Failed to save policy" in result.output


class TestConfigCommands:
    """Tests for `config`."""

    def test_show_redacts_secret(self, runner: CliRunner, policy_file: Path):
        """config show prints the policy without the secret."""
        result = runner.invoke(cli, ["config", "show"])

        data = json.loads(result.output)
        assert data["allowedUsers"] == ["alice"]
        assert data["adminEnabled"] is True
        assert "s3cret" not in result.output

    def test_path(self, runner: CliRunner, policy_file: Path):
        """config path prints the policy file location."""
        result = runner.invoke(cli, ["config", "path"])

        assert str(policy_file) in result.output

    def test_set_default(self, runner: CliRunner, policy_file: Path):
        """config set-default persists the new default."""
        result = runner.invoke(cli, ["config", "set-default", "allow"])

        assert result.exit_code == 0
        assert json.loads(policy_file.read_text())["defaultPolicy"] == "allow"

    def test_set_default_rejects_other_values(self, runner: CliRunner, policy_file: Path):
        """Only allow and deny are accepted."""
        result = runner.invoke(cli, ["config", "set-default", "maybe"])

        assert result.exit_code != 0

    def test_logging_off(self, runner: CliRunner, policy_file: Path, log_path: Path):
        """config logging off stops audit writes."""
        runner.invoke(cli, ["config", "logging", "off"])
        runner.invoke(cli, ["check", "alice"])

        assert json.loads(policy_file.read_text())["logInstallAttempts"] is False
        assert not log_path.exists()


class TestLogsCommands:
    """Tests for `logs`."""

    def test_show_empty(self, runner: CliRunner, policy_file: Path):
        """Given no attempts, says so."""
        result = runner.invoke(cli, ["logs", "show"])

        assert result.exit_code == 0
        assert "No install attempts recorded." in result.output

    def test_show_newest_first(self, runner: CliRunner, policy_file: Path):
        """Attempts are listed newest first with ALLOW / DENY."""
        # Arrange
        runner.invoke(cli, ["check", "alice", "--skill", "weather"])
        runner.invoke(cli, ["check", "eve", "--skill", "weather"])

        # Act
        result = runner.invoke(cli, ["logs", "show"])

        # Assert
        lines = result.output.strip().splitlines()
        assert "DENY" in lines[0] and "eve" in lines[0]
        assert "ALLOW" in lines[1] and "alice" in lines[1]

    def test_show_json_limit(self, runner: CliRunner, policy_file: Path):
        """--json -n 1 prints one raw record."""
        runner.invoke(cli, ["check", "alice"])
        runner.invoke(cli, ["check", "bob"])

        result = runner.invoke(cli, ["logs", "show", "--json", "-n", "1"])

        lines = result.output.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["userId"] == "bob"

    def test_path(self, runner: CliRunner, log_path: Path):
        """logs path prints the audit log location."""
        result = runner.invoke(cli, ["logs", "path"])

        assert str(log_path) in result.output


class TestServeCommands:
    """Tests for `serve` and `mcp` (servers mocked)."""

    def test_serve_uses_policy_port(self, runner: CliRunner, config_path: Path):
        """Given a port in the policy file, serve listens there."""
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"port": 9100}))

        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["port"] == 9100
        assert mock_run.call_args.kwargs["host"] == "127.0.0.1"

    def test_serve_default_port(self, runner: CliRunner):
        """Without any port configured, serve listens on 8790."""
        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            runner.invoke(cli, ["serve"])

        assert mock_run.call_args.kwargs["port"] == 8790

    def test_serve_port_option_wins(self, runner: CliRunner):
        """--port overrides the configured port."""
        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            runner.invoke(cli, ["serve", "--port", "9200"])

        assert mock_run.call_args.kwargs["port"] == 9200

    def test_mcp_runs_server(self, runner: CliRunner):
        """mcp runs the FastMCP server over stdio."""
        with patch("fastmcp.FastMCP.run") as mock_run:
            result = runner.invoke(cli, ["mcp"])

        assert result.exit_code == 0
        mock_run.assert_called_once()

    def test_system_log_option(self, runner: CliRunner, tmp_path: Path):
        """--system-log adds a file handler before the plugin starts."""
        system_log = tmp_path / "system.jsonl"

        with (
            patch("skill_permissions.cli.commands.serve.configure_system_logger_file") as mock_configure,
            patch("fastmcp.FastMCP.run"),
        ):
            result = runner.invoke(cli, ["mcp", "--system-log", str(system_log)])

        assert result.exit_code == 0
        mock_configure.assert_called_once_with(system_log)

    def test_password_env_survives_restart(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch, config_path: Path
    ):
        """Given the secret in the environment, admin access works after a mutation and restart."""
        # Arrange
        monkeypatch.setenv(PASSWORD_ENV_VAR, "s3cret")

        # Act: first run mutates the policy, second run reloads it
        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            runner.invoke(cli, ["serve"])
        allow = TestClient(mock_run.call_args.args[0]).post(
            "/api/users/allow", params={"auth": "s3cret"}, json={"userId": "bob"}
        )

        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            runner.invoke(cli, ["serve"])
        config = TestClient(mock_run.call_args.args[0]).get("/api/config", params={"auth": "s3cret"})

        # Assert
        assert allow.status_code == 200
        assert config.status_code == 200
        assert config.json()["allowedUsers"] == ["bob"]
        assert "s3cret" not in config_path.read_text()

    def test_password_option(self, runner: CliRunner):
        """--password enables the admin endpoints."""
        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            runner.invoke(cli, ["serve", "--password", "opt-secret"])

        client = TestClient(mock_run.call_args.args[0])
        assert client.get("/api/config", params={"auth": "opt-secret"}).status_code == 200
        assert client.get("/api/config", params={"auth": "other"}).status_code == 401

    def test_no_password_disables_admin(self, runner: CliRunner):
        """Without any secret, admin endpoints answer 401."""
        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            runner.invoke(cli, ["serve"])

        response = TestClient(mock_run.call_args.args[0]).get("/api/config", params={"auth": ""})

        assert response.status_code == 401

    def test_port_env(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
        """$SKILL_PERMISSIONS_PORT sets the listen port."""
        monkeypatch.setenv(PORT_ENV_VAR, "9300")

        with patch("skill_permissions.cli.commands.serve.uvicorn.run") as mock_run:
            result = runner.invoke(cli, ["serve"])

        assert result.exit_code == 0
        assert mock_run.call_args.kwargs["port"] == 9300
