"""Unit tests for the bootstrap instruction hook.

Uses AAA pattern (Arrange-Act-Assert) for clarity.
"""

from skill_permissions.hooks import (
    BOOTSTRAP_INSTRUCTION,
    AgentBootstrapEvent,
    IgnoredEvent,
    handle_event,
    parse_event,
)


class TestParseEvent:
    """Tests for turning raw host events into typed variants."""

    def test_bootstrap_event(self):
        """Given agent/bootstrap, returns AgentBootstrapEvent with the same mapping."""
        files: dict[str, str] = {}

        event = parse_event({"type": "agent", "action": "bootstrap", "context": {"bootstrapFiles": files}})

        assert isinstance(event, AgentBootstrapEvent)
        assert event.bootstrap_files is files

    def test_other_event_ignored(self):
        """Given any other type/action, returns IgnoredEvent."""
        event = parse_event({"type": "agent", "action": "shutdown"})

        assert event == IgnoredEvent(type="agent", action="shutdown")

    def test_missing_context(self):
        """Given a bootstrap without context, carries no documents."""
        event = parse_event({"type": "agent", "action": "bootstrap"})

        assert isinstance(event, AgentBootstrapEvent)
        assert event.bootstrap_files is None


class TestHandleEvent:
    """Tests for injecting the instruction."""

    def test_appends_to_existing_document(self):
        """Given an existing CLAUDE.md, appends a newline and the instruction."""
        # Arrange
        files = {"CLAUDE.md": "# Project rules"}
        raw = {"type": "agent", "action": "bootstrap", "context": {"bootstrapFiles": files}}

        # Act
        injected = handle_event(raw)

        # Assert
        assert injected is True
        assert files["CLAUDE.md"] == "# Project rules\n" + BOOTSTRAP_INSTRUCTION

    def test_creates_missing_document(self):
        """Given no CLAUDE.md, creates it with the instruction."""
        files = {"README.md": "hello"}

        handle_event(AgentBootstrapEvent(bootstrap_files=files))

        assert files["CLAUDE.md"] == "\n" + BOOTSTRAP_INSTRUCTION
        assert files["README.md"] == "hello"

    def test_instruction_names_check_tool(self):
        """The injected text tells the agent which tool to call."""
        assert "skill_permission_check" in BOOTSTRAP_INSTRUCTION
        assert '"allowed": false' in BOOTSTRAP_INSTRUCTION

    def test_other_events_untouched(self):
        """Given a non-bootstrap event, changes nothing."""
        files = {"CLAUDE.md": "x"}

        injected = handle_event({"type": "command", "action": "bootstrap", "context": {"bootstrapFiles": files}})

        assert injected is False
        assert files == {"CLAUDE.md": "x"}

    def test_bootstrap_without_documents(self):
        """Given a bootstrap without documents, does nothing."""
        assert handle_event(AgentBootstrapEvent(bootstrap_files=None)) is False

    def test_each_bootstrap_appends_again(self):
        """Two bootstrap events append the instruction twice."""
        files: dict[str, str] = {}
        event = AgentBootstrapEvent(bootstrap_files=files)

        handle_event(event)
        handle_event(event)

        assert files["CLAUDE.md"].count("## Skill Installation Permissions") == 2
