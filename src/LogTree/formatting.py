# ============================================================================
# LogTree - Record Formatting
#
# Purpose: Render message bodies and full record lines
# Inputs: Format string + args, module name, level, calling thread
# Outputs: One record line per log call
# Dependencies: hashlib, threading, levels, utils.time
# Usage: line = format_record(format_message("x=%d", (1,)), "NET.IF", Level.INFO)
#
# Changelog:
#   2026-09-02: Initial message/record formatting
#   2026-09-18: Thread tag for records emitted off the main thread
#   2026-10-16: Any exception while rendering the body becomes the
#               "logging error:" placeholder
# ============================================================================

import hashlib
import threading
from datetime import datetime
from typing import Any, Optional, Tuple

from LogTree.levels import level_to_string
from LogTree.utils.time import TIMEFMT, get_local_timestamp

MAX_MESSAGE_LENGTH = 255
MAX_RECORD_LENGTH = 255
MODULE_WIDTH = 8


def format_message(msg: Any, args: Tuple[Any, ...] = (), max_length: int = MAX_MESSAGE_LENGTH) -> str:
    """
    Render a message body with %-style interpolation.

    Args are applied the way stdlib logging applies them: ``msg % args`` when
    args are given, ``str(msg)`` otherwise. A single mapping argument is used
    for named placeholders.

    Args:
        msg: Format string (or any object)
        args: Interpolation arguments
        max_length: Bodies longer than this are cut

    Returns:
        Message body; "logging error: ..." when interpolation fails
    """
    if args and len(args) == 1 and isinstance(args[0], dict) and args[0]:
        args = args[0]  # type: ignore[assignment]
    try:
        text = str(msg)
        if args:
            text = text % args
    except Exception as e:
        # any failure of the caller's objects becomes the record body
        text = f"logging error: {e}"
    return text[:max_length]


def thread_tag(ident: Optional[int] = None) -> str:
    """Six hex digits derived from a thread identifier."""
    if ident is None:
        ident = threading.get_ident()
    return hashlib.blake2s(str(ident).encode(), digest_size=3).hexdigest()


def format_record(
    message: str,
    module: str,
    level: int,
    *,
    time_format: str = TIMEFMT,
    module_width: int = MODULE_WIDTH,
    max_length: int = MAX_RECORD_LENGTH,
    now: Optional[datetime] = None,
) -> str:
    """
    Render one record line.

    Layout: ``<timestamp> <module>: <tag> [<label>] <message>`` where the
    module part is omitted for the root logger and the thread tag is only
    present when called off the main thread.

    Args:
        message: Rendered message body
        module: Full dotted module path ("" for root)
        level: Severity of the message
        time_format: strftime format of the timestamp
        module_width: Module names are cut to this many characters
        max_length: Record lines longer than this are cut
        now: Optional fixed time, used by tests

    Returns:
        Record line without trailing newline
    """
    parts = [get_local_timestamp(time_format, now)]
    if module:
        parts.append(f"{module[:module_width]}:")
    if threading.current_thread() is not threading.main_thread():
        parts.append(f"<{thread_tag()}>")
    parts.append(f"[{level_to_string(level)}]")
    parts.append(message)
    return " ".join(parts)[:max_length]
