"""Host lifecycle hook: inject the permission instruction at agent bootstrap.

The host runtime sends lifecycle events shaped like
    {"type": "agent", "action": "bootstrap", "context": {"bootstrapFiles": {...}}}

parse_event() turns them into a tagged variant:
- AgentBootstrapEvent: carries the caller-owned bootstrap document mapping
- IgnoredEvent: every other type/action

handle_event() appends the instruction block to the "CLAUDE.md" document of
a bootstrap event, creating it if absent. Other events are a no-op. The
mapping is mutated in place; the policy store is never touched.
"""

from __future__ import annotations

__all__ = [
    "BOOTSTRAP_INSTRUCTION",
    "AgentBootstrapEvent",
    "HostEvent",
    "IgnoredEvent",
    "handle_event",
    "parse_event",
]

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Union

from skill_permissions.constants import BOOTSTRAP_DOCUMENT, CHECK_TOOL_NAME
from skill_permissions.telemetry.system.system_logger import get_system_logger

logger = get_system_logger()

BOOTSTRAP_INSTRUCTION = f"""
## Skill Installation Permissions

BEFORE you install a skill (via `clawdhub install` or similar), you MUST run this check:

1. Call the tool `{CHECK_TOOL_NAME}` with the user's id
2. IF the response contains `"allowed": false`:
   - Do NOT install the skill
   - Politely tell the user they do not have permission

This rule is MANDATORY for every skill installation!
"""


@dataclass
class AgentBootstrapEvent:
    """Agent is being bootstrapped; documents may still be amended.

    Attributes:
        bootstrap_files: Document name -> content, owned by the host.
            None when the host sent no bootstrap documents.
    """

    bootstrap_files: MutableMapping[str, str] | None


@dataclass(frozen=True)
class IgnoredEvent:
    """Any lifecycle event this plugin does not act on."""

    type: str
    action: str


HostEvent = Union[AgentBootstrapEvent, IgnoredEvent]


def parse_event(raw: Mapping[str, Any]) -> HostEvent:
    """Build a typed event from the host's {type, action, context?} shape.

    Args:
        raw: Event as sent by the host.

    Returns:
        AgentBootstrapEvent for type="agent", action="bootstrap";
        IgnoredEvent otherwise.
    """
    event_type = str(raw.get("type", ""))
    action = str(raw.get("action", ""))
    if event_type != "agent" or action != "bootstrap":
        return IgnoredEvent(type=event_type, action=action)

    context = raw.get("context") or {}
    files = context.get("bootstrapFiles") if isinstance(context, Mapping) else None
    return AgentBootstrapEvent(bootstrap_files=files if isinstance(files, MutableMapping) else None)


def handle_event(event: HostEvent | Mapping[str, Any]) -> bool:
    """Handle a host lifecycle event.

    Args:
        event: Typed event, or the raw mapping sent by the host.

    Returns:
        True if the instruction was injected.
    """
    if not isinstance(event, (AgentBootstrapEvent, IgnoredEvent)):
        event = parse_event(event)

    if not isinstance(event, AgentBootstrapEvent) or event.bootstrap_files is None:
        return False

    existing = event.bootstrap_files.get(BOOTSTRAP_DOCUMENT, "")
    event.bootstrap_files[BOOTSTRAP_DOCUMENT] = existing + "\n" + BOOTSTRAP_INSTRUCTION

    logger.info(
        {
            "event": "bootstrap_instruction_injected",
            "message": f"Skill permission instruction injected into {BOOTSTRAP_DOCUMENT}",
            "component": "hooks",
        }
    )
    return True
