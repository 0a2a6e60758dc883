"""System logger for operational events.

Events are logged as dicts and rendered as one JSON object per line:

    logger.warning(
        {
            "event": "policy_file_invalid",
            "message": "Ignoring unreadable policy file",
            "component": "policy_store",
            "details": {"path": str(path)},
        }
    )

Output goes to stderr by default (stdout is reserved for the MCP stdio
transport). configure_system_logger_file() adds a JSONL file handler.
"""

from __future__ import annotations

__all__ = [
    "SYSTEM_LOGGER_NAME",
    "JsonLineFormatter",
    "configure_system_logger_file",
    "get_system_logger",
]

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

SYSTEM_LOGGER_NAME = "skill-permissions.system"


class JsonLineFormatter(logging.Formatter):
    """Render log records as single-line JSON with an ISO 8601 time field."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
        }
        if isinstance(record.msg, dict):
            payload.update(record.msg)
        else:
            payload["message"] = record.getMessage()

        if record.exc_info and record.exc_info[0] is not None:
            payload["error_type"] = record.exc_info[0].__name__
            payload["error_message"] = str(record.exc_info[1])

        return json.dumps(payload, default=str)


def get_system_logger() -> logging.Logger:
    """Get the shared system logger, attaching a stderr handler on first use.

    Returns:
        Logger named SYSTEM_LOGGER_NAME.
    """
    logger = logging.getLogger(SYSTEM_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLineFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def configure_system_logger_file(log_path: Path) -> None:
    """Also write system events to a JSONL file.

    Creates the parent directory if needed. Calling twice with the same
    path does not add a second handler.

    Args:
        log_path: Path to the system log file.
    """
    logger = get_system_logger()
    resolved = str(log_path.resolve())
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == resolved:
            return

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(JsonLineFormatter())
    logger.addHandler(file_handler)
