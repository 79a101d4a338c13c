# ============================================================================
# LogTree - Diagnostic Logging Utilities
#
# Purpose: Stdlib logging channel for failures inside the logger tree itself
# Inputs: Log level, format string
# Outputs: Configured stdlib logger instances
# Dependencies: logging (stdlib)
# Usage: logger = get_logger(__name__)
#
# Changelog:
#   2026-09-02: Initial diagnostic logging setup
#   2026-09-21: Channel is the escape route for errors raised while a node lock
#               is held; it never routes back into the tree
# ============================================================================

import logging
from typing import Optional


_LOGGING_CONFIGURED = False

DIAGNOSTIC_ROOT = "LogTree"


def setup_logging(level: str = "WARNING", format_string: Optional[str] = None) -> None:
    """
    Configure the diagnostic channel for the package.

    Only the "LogTree" stdlib logger is touched; the process-wide stdlib root
    logger is left alone so embedding applications keep their own setup.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_string: Optional custom format string
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S"))

    channel = logging.getLogger(DIAGNOSTIC_ROOT)
    channel.addHandler(handler)
    channel.setLevel(getattr(logging, level.upper()))

    _LOGGING_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a diagnostic logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Stdlib logger instance
    """
    return logging.getLogger(name)
