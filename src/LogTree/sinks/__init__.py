# ============================================================================
# LogTree - Sinks Package
#
# Purpose: Output targets for rendered records
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from LogTree.sinks import StreamKind, LocalFileSink
#
# Changelog:
#   2026-09-02: Initial sinks package
# ============================================================================

from LogTree.sinks.base import Sink
from LogTree.sinks.local_file import LocalFileSink, resolve_log_path
from LogTree.sinks.stream import StreamKind, StreamSink, make_stream_sink, parse_stream

__all__ = [
    "Sink",
    "StreamKind",
    "StreamSink",
    "LocalFileSink",
    "make_stream_sink",
    "parse_stream",
    "resolve_log_path",
]
