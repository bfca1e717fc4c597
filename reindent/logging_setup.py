"""
Logging setup for the command-line entry point.

Log records go to stderr so stdout carries only reindented text.
"""
from __future__ import annotations

import logging
import os
import sys

LOG_ENV_VAR = "REINDENT_LOG"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def resolve_level(configured: str | None = None) -> int:
    """Pick the level from ``$REINDENT_LOG``, then ``configured``, then DEBUG."""
    for name in (os.environ.get(LOG_ENV_VAR), configured):
        if not name:
            continue
        level = logging.getLevelName(name.strip().upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG


def setup_logging(configured: str | None = None, stream=None) -> logging.Logger:
    """
    Configure the ``reindent`` logger.

    Args:
        configured: level name from the config file, if any
        stream: handler stream (default: stderr)

    Returns:
        The package logger
    """
    level = resolve_level(configured)
    logger = logging.getLogger("reindent")
    logger.setLevel(level)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    # Repeated invocations in one process (tests, ``python -m``) share the logger.
    for existing in list(logger.handlers):
        if getattr(existing, "_reindent_handler", False):
            logger.removeHandler(existing)
    handler._reindent_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


__all__ = ["LOG_ENV_VAR", "LOG_FORMAT", "resolve_level", "setup_logging"]
