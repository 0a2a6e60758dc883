"""Command-line interface for skill-permissions.

Provides commands for serving the HTTP API and MCP tools, checking users,
and managing the persisted policy.
"""

from .main import cli, main

__all__ = ["cli", "main"]
