# ============================================================================
# LogTree - Utils Package
#
# Purpose: Shared utility functions
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from LogTree.utils import get_local_timestamp
#
# Changelog:
#   2026-09-02: Initial utils package
# ============================================================================

from LogTree.utils.time import TIMEFMT, get_local_timestamp

__all__ = ["TIMEFMT", "get_local_timestamp"]
