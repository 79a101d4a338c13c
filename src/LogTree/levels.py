# ============================================================================
# LogTree - Severity Levels
#
# Purpose: Severity ranks, the UNCHANGED sentinel and level name helpers
# Inputs: Integer ranks or level names
# Outputs: Level enum members, labels
# Dependencies: enum
# Usage: node.set_level(Level.DEBUG); level_to_string(Level.ERROR) -> "error"
#
# Changelog:
#   2026-09-02: Initial levels
#   2026-09-14: parse_level() accepts names from YAML/env configuration
# ============================================================================

from enum import IntEnum
from typing import Union

from LogTree.errors import ConfigurationError

# Passed to any setter to leave the current value untouched
UNCHANGED = -1


class Level(IntEnum):
    """Severity rank. A message passes a node when message level >= node threshold."""

    NOTSET = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5


MINLOG = Level.NOTSET
MAXLOG = Level.CRITICAL

_LABELS = {
    Level.NOTSET: "unset",
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARNING: "warning",
    Level.ERROR: "error",
    Level.CRITICAL: "critical",
}


def clamp_level(level: int) -> Level:
    """Clamp an integer rank into [NOTSET, CRITICAL]. Negative ranks use their absolute value."""
    return Level(min(int(MAXLOG), max(int(MINLOG), abs(int(level)))))


def level_to_string(level: int) -> str:
    """Lower-case label used inside record lines; "unknown" for out of range values."""
    try:
        return _LABELS[Level(level)]
    except ValueError:
        return "unknown"


def parse_level(value: Union[int, str]) -> Level:
    """
    Convert a configuration value to a Level.

    Args:
        value: Level name (case-insensitive, e.g. "warning") or integer rank

    Returns:
        Matching Level

    Raises:
        ConfigurationError: If the name is not a known level
    """
    if isinstance(value, int):
        return clamp_level(value)
    name = str(value).strip().upper()
    if name.lstrip("-").isdigit():
        return clamp_level(int(name))
    try:
        return Level[name]
    except KeyError as e:
        raise ConfigurationError(
            f"Unknown log level: {value!r}", details=f"expected one of {[lv.name for lv in Level]}"
        ) from e
