"""API route modules.

- check: Permission check (public)
- config: Policy read/update (admin)
- users: Allow/deny/remove a single user (admin)
- logs: Audit log viewer (admin)
"""

from . import check, config, logs, users

__all__ = ["check", "config", "logs", "users"]
