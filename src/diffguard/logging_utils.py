"""Logging configuration utilities for diffguard."""

import logging
import os
import sys
from typing import Optional

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_level(level: Optional[str] = None) -> str:
    """Pick the log level from the argument, DIFFGUARD_LOG_LEVEL or LOG_LEVEL.

    Raises ValueError for a name the logging module does not know.
    """
    resolved = level or os.getenv("DIFFGUARD_LOG_LEVEL") or os.getenv("LOG_LEVEL", "INFO")
    resolved = resolved.strip().upper()
    if not isinstance(logging.getLevelName(resolved), int):
        raise ValueError(f"Unknown log level: {resolved!r}")
    return resolved


def configure_logging(level: Optional[str] = None) -> None:
    """Configure application-wide logging once.

    Records go to stderr so the CLI can keep stdout for the JSON envelope.
    """
    resolved = resolve_log_level(level)
    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=resolved,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )
