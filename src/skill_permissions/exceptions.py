"""Exception hierarchy for skill-permissions.

Storage and parse problems in the audit log and the persisted policy file
are handled where they occur (logged, never raised). The exceptions here
cover caller mistakes that the delivery surfaces translate into errors.
"""

__all__ = [
    "SkillPermissionsError",
    "PolicyValidationError",
]


class SkillPermissionsError(Exception):
    """Base class for skill-permissions errors."""


class PolicyValidationError(SkillPermissionsError, ValueError):
    """A policy update carried invalid field values.

    Raised by PolicyStore.update before any in-memory state is changed.
    """
