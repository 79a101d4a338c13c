# ============================================================================
# LogTree - Time Utilities
#
# Purpose: Time-related utility functions
# Inputs: strftime format
# Outputs: Timestamps
# Dependencies: datetime
# Usage: timestamp = get_local_timestamp("%Y/%m/%d:%H:%M:%S")
#
# Changelog:
#   2026-09-02: Initial time utilities
# ============================================================================

from datetime import datetime
from typing import Optional

# Record timestamps have second resolution in local time
TIMEFMT = "%Y/%m/%d:%H:%M:%S"


def get_local_timestamp(fmt: str = TIMEFMT, now: Optional[datetime] = None) -> str:
    """
    Get current local time rendered with a strftime format.

    Args:
        fmt: strftime format (default: record timestamp format)
        now: Optional fixed time, used by tests

    Returns:
        Formatted timestamp string (e.g., "2026/09/02:15:22:08")
    """
    if now is None:
        now = datetime.now()
    return now.strftime(fmt)
