# ============================================================================
# LogTree - Standard Stream Sinks
#
# Purpose: Write records to stdout / stderr / the buffered "log" stream
# Inputs: Record lines
# Outputs: Text on the selected standard stream
# Dependencies: sys, base
# Usage: sink = make_stream_sink(StreamKind.STDERR); sink.write(record)
#
# Changelog:
#   2026-09-02: Initial stream sinks (DEVNULL, STDOUT, STDERR, STDLOG)
#   2026-09-10: Resolve sys.stdout/sys.stderr at write time so redirected
#               streams (pytest capture, contextlib.redirect_stdout) are honoured
# ============================================================================

import sys
from enum import IntEnum
from typing import Optional, TextIO, Union

from LogTree.errors import ConfigurationError, SinkError
from LogTree.sinks.base import Sink


class StreamKind(IntEnum):
    """Stream selector. Values have nothing to do with file descriptors."""

    DEVNULL = 0
    STDOUT = 1
    STDERR = 2
    STDLOG = 3


class StreamSink(Sink):
    """
    Sink bound to one of the standard text streams.

    STDLOG shares stderr but is not flushed after each record.
    """

    def __init__(self, kind: StreamKind):
        if kind == StreamKind.DEVNULL:
            raise ValueError("DEVNULL has no stream; use None as the stream sink")
        self.kind = StreamKind(kind)
        self._flush = self.kind != StreamKind.STDLOG

    def _stream(self) -> TextIO:
        if self.kind == StreamKind.STDOUT:
            return sys.stdout
        return sys.stderr

    def write(self, record: str) -> None:
        try:
            stream = self._stream()
            stream.write(record + "\n")
            if self._flush:
                stream.flush()
        except (OSError, ValueError) as e:
            raise SinkError(f"Failed to write record to {self.kind.name.lower()}", details=str(e)) from e

    def __repr__(self) -> str:
        return f"StreamSink({self.kind.name})"


def make_stream_sink(kind: int) -> Optional[StreamSink]:
    """
    Build the sink for a stream selector.

    Args:
        kind: StreamKind value

    Returns:
        StreamSink, or None for DEVNULL
    """
    kind = StreamKind(kind)
    if kind == StreamKind.DEVNULL:
        return None
    return StreamSink(kind)


def parse_stream(value: Union[int, str]) -> StreamKind:
    """
    Convert a configuration value to a StreamKind.

    Args:
        value: Stream name (case-insensitive, e.g. "stderr") or integer selector

    Raises:
        ConfigurationError: If the value does not name a stream
    """
    try:
        if isinstance(value, int):
            return StreamKind(value)
        name = str(value).strip().upper()
        if name.isdigit():
            return StreamKind(int(name))
        return StreamKind[name]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(
            f"Unknown stream: {value!r}", details=f"expected one of {[k.name for k in StreamKind]}"
        ) from e
