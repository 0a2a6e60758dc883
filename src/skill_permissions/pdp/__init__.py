"""Policy Decision Point (PDP) - install permission decisions.

The PDP is stateless and side-effect free. Both delivery surfaces
(api/ and tools.py) call decide() and do their own I/O around it.

Structure:
    identity.py - Channel-prefix normalization of user ids
    engine.py   - decide() and the Decision result
"""

from skill_permissions.pdp.engine import Decision, decide, matches_any
from skill_permissions.pdp.identity import normalize_identity

__all__ = [
    "Decision",
    "decide",
    "matches_any",
    "normalize_identity",
]
