"""Structured log output for text2slack.

Installs a single Loguru sink that writes JSON lines to stderr. stdout is left
alone because the MCP stdio transport owns it.
"""

from __future__ import annotations

import os
import sys
from typing import Any, TextIO

from loguru import logger

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_LEVEL_ALIASES = {"WARN": "WARNING"}

_handler_id: int | None = None


def parse_log_level(value: str | None) -> str | None:
    """Return a normalized level name, or None if unset/invalid."""
    if not value:
        return None
    level = value.strip().upper()
    level = _LEVEL_ALIASES.get(level, level)
    return level if level in LOG_LEVELS else None


def _make_filter(enabled: bool, min_level: str):
    min_no = logger.level(min_level).no
    error_no = logger.level("ERROR").no

    def _filter(record: dict[str, Any]) -> bool:
        # Errors are always emitted.
        if record["level"].no >= error_no:
            return True
        return enabled and record["level"].no >= min_no

    return _filter


def setup_logging(
    enabled: bool | None = None,
    level: str | None = None,
    sink: TextIO | None = None,
) -> int:
    """
    Configure the text2slack log sink.

    Logging is enabled when DEBUG=true or LOG_LEVEL is a valid level, unless
    ``enabled`` overrides it. ERROR records are written regardless.

    The sink is enqueued so writing never blocks the event loop, and sink
    failures are caught by Loguru instead of reaching the caller.

    Returns:
        The Loguru handler id.
    """
    global _handler_id

    env_level = parse_log_level(os.getenv("LOG_LEVEL"))
    debug_env = os.getenv("DEBUG", "").strip().lower() == "true"
    if enabled is None:
        enabled = debug_env or env_level is not None
    min_level = parse_log_level(level) or env_level or "INFO"

    logger.remove()
    _handler_id = logger.add(
        sink or sys.stderr,
        level="DEBUG",
        filter=_make_filter(enabled, min_level),
        serialize=True,
        enqueue=True,
        catch=True,
    )
    return _handler_id


def shutdown_logging() -> None:
    """Flush queued records and drop the sink."""
    global _handler_id
    if _handler_id is None:
        return
    logger.complete()
    logger.remove(_handler_id)
    _handler_id = None
