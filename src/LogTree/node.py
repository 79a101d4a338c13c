# ============================================================================
# LogTree - Logger Nodes and Handles
#
# Purpose: One vertex of the logger tree plus the handle clients hold
# Inputs: Log calls, configuration calls
# Outputs: Record lines on the sinks of the node and its ancestors
# Dependencies: threading, weakref, formatting, levels, sinks
# Usage: handle = registry.get_logger("NET.IF"); handle.error("down: %s", name)
#
# Locking: every node carries two re-entrant locks.
#   _tree_lock    guards `children` of this node and `refs` of each child
#                 (a node's refs are guarded by its parent's tree lock; the
#                 root guards its own). Pruning takes parent, then child.
#   _config_lock  guards level, stream, file and propagate. Taken one node at
#                 a time during the emission walk.
#
# Changelog:
#   2026-09-02: Initial node with weak child references
#   2026-09-21: Replaced GC reachability with explicit pins (handle counting);
#               pruning cascades upward under parent-then-child locking
#   2026-09-28: Errors from set_logfile are reported after the config lock is
#               released; sink write failures go to the diagnostic channel
#   2026-10-16: Handles dropped by the garbage collector queue their pin for
#               release at the next registry call instead of releasing inline
# ============================================================================

import collections
import threading
import weakref
from typing import Any, Deque, Dict, List, Optional, Tuple

from LogTree.config import RecordConfig
from LogTree.errors import SinkError
from LogTree.formatting import format_message, format_record
from LogTree.levels import UNCHANGED, Level, clamp_level
from LogTree.logging_utils import get_logger
from LogTree.sinks.base import Sink
from LogTree.sinks.local_file import LocalFileSink, resolve_log_path
from LogTree.sinks.stream import StreamKind, StreamSink, make_stream_sink

logger = get_logger(__name__)

# Nodes whose handle was collected without release(). The collector can run
# anywhere, including inside a tree lock, so the pin is only queued there.
_deferred_releases: Deque["LoggerNode"] = collections.deque()


def release_deferred() -> int:
    """
    Release pins queued by collected handles. Call with no node lock held.

    Returns:
        Number of pins released
    """
    count = 0
    while True:
        try:
            node = _deferred_releases.popleft()
        except IndexError:
            return count
        node.release_pin()
        count += 1


class LoggerNode:
    """
    A vertex of the logger tree.

    The parent link is strong; the parent's `children` entry for this node
    lives exactly as long as the node has pins (`refs`) or children of its own.
    Clients never hold nodes directly; they hold `Logger` handles, each of
    which owns one pin.
    """

    def __init__(
        self,
        leaf_name: str = "",
        parent: Optional["LoggerNode"] = None,
        *,
        level: int = Level.NOTSET,
        propagate: bool = True,
        record_config: Optional[RecordConfig] = None,
    ):
        self.leaf_name = leaf_name
        self.parent = parent
        self.children: Dict[str, "LoggerNode"] = {}
        self.refs = 0
        self.pruned = False

        self._tree_lock = threading.RLock()
        self._config_lock = threading.RLock()

        self._level = clamp_level(level)
        self._propagate = propagate
        self._stream_kind = StreamKind.DEVNULL
        self._stream: Optional[StreamSink] = None
        self._file: Optional[LocalFileSink] = None
        self._record = record_config if record_config is not None else RecordConfig()

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def full_path(self) -> str:
        """Dotted path from the root, derived from tree position."""
        if self.parent is None:
            # root, or a node already detached from the tree
            return self.leaf_name
        names = []
        node = self
        while node.parent is not None:
            names.append(node.leaf_name)
            node = node.parent
        return ".".join(reversed(names))

    def __repr__(self) -> str:
        return f"<LoggerNode {self.full_path or '(root)'!r} refs={self.refs} children={len(self.children)}>"

    # ------------------------------------------------------------------
    # Tree structure
    # ------------------------------------------------------------------

    def pin(self) -> None:
        """Take one more pin on a node the caller already keeps alive."""
        lock = self.parent._tree_lock if self.parent is not None else self._tree_lock
        with lock:
            self.refs += 1

    def pin_child(self, segment: str) -> "LoggerNode":
        """
        Find or create the child for `segment` and pin it.

        Check, insert and pin happen under this node's tree lock, so
        concurrent callers for the same segment all end up with one child.
        """
        with self._tree_lock:
            child = self.children.get(segment)
            if child is not None and child.pruned:
                logger.debug(f"child '{segment}' vanished concurrently; re-creating")
                child = None
            if child is None:
                child = LoggerNode(segment, self, record_config=self._record)
                self.children[segment] = child
                logger.debug(f"created logger node {child.full_path!r}")
            child.refs += 1
            return child

    def release_pin(self) -> None:
        """
        Drop one pin. A childless node left without pins is detached from
        its parent, its sinks are closed, and the parent is checked in turn.
        """
        parent = self.parent
        if parent is None:
            with self._tree_lock:
                self.refs = max(0, self.refs - 1)
            return

        with parent._tree_lock:
            with self._tree_lock:
                self.refs = max(0, self.refs - 1)
                detached = self._detach_locked(parent)
        if not detached:
            return
        self._finish_detach()

        node = parent
        while True:
            up = node.parent
            if up is None or not node._detach_if_unused():
                break
            node = up

    def _detach_locked(self, parent: "LoggerNode") -> bool:
        # Caller holds parent._tree_lock then self._tree_lock
        if self.pruned or self.refs > 0 or self.children:
            return False
        if parent.children.get(self.leaf_name) is self:
            del parent.children[self.leaf_name]
        self.pruned = True
        return True

    def _detach_if_unused(self) -> bool:
        parent = self.parent
        if parent is None:
            return False
        with parent._tree_lock:
            with self._tree_lock:
                detached = self._detach_locked(parent)
        if detached:
            self._finish_detach()
        return detached

    def _finish_detach(self) -> None:
        logger.debug(f"pruned logger node {self.full_path!r}")
        self.close()
        self.parent = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def get_level(self) -> Level:
        with self._config_lock:
            return self._level

    def set_level(self, level: int) -> Level:
        """Set the threshold (clamped to NOTSET..CRITICAL) and return the previous one."""
        with self._config_lock:
            previous = self._level
            if level != UNCHANGED:
                self._level = clamp_level(level)
            return previous

    def set_propagation(self, mode: bool) -> bool:
        with self._config_lock:
            previous = self._propagate
            self._propagate = bool(mode)
            return previous

    def get_propagation(self) -> bool:
        with self._config_lock:
            return self._propagate

    def get_stream(self) -> StreamKind:
        with self._config_lock:
            return self._stream_kind

    def set_stream(self, kind: int) -> StreamKind:
        """Select DEVNULL/STDOUT/STDERR/STDLOG. UNCHANGED or unknown values keep the current stream."""
        with self._config_lock:
            previous = self._stream_kind
            if kind == UNCHANGED:
                return previous
            try:
                new_kind = StreamKind(kind)
            except ValueError:
                return previous
            self._stream_kind = new_kind
            self._stream = make_stream_sink(new_kind)
            return previous

    def get_logfile(self) -> str:
        with self._config_lock:
            return self._file.path if self._file is not None else ""

    def set_logfile(self, path: Optional[str]) -> None:
        """
        Point the file sink at `path` (append mode). Re-targeting the file
        already open is a no-op; an empty path closes the current file.
        Failures are logged through this node once the lock is released.
        """
        error: Optional[SinkError] = None
        with self._config_lock:
            current = self._file.path if self._file is not None else ""
            try:
                new_path = resolve_log_path(path) if path else ""
            except SinkError as e:
                # a bad target leaves the file already open in place
                new_path = current
                error = e

            if new_path != current:
                if self._file is not None:
                    self._file.close()
                    self._file = None
                if new_path:
                    try:
                        self._file = LocalFileSink(new_path)
                    except SinkError as e:
                        error = e

        if error is not None:
            logger.warning(f"{self.full_path or '(root)'}: {error}")
            self.log(Level.ERROR, "error opening log file '%s': %s", path, error.details or error.message)

    def close(self) -> None:
        """Close the file sink, if any."""
        with self._config_lock:
            if self._file is not None:
                self._file.close()
                self._file = None

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def render(self, level: int, msg: Any, args: Tuple[Any, ...]) -> str:
        rec = self._record
        message = format_message(msg, args, rec.max_message_length)
        return format_record(
            message,
            self.full_path,
            level,
            time_format=rec.time_format,
            module_width=rec.module_width,
            max_length=rec.max_record_length,
        )

    def log(self, level: int, msg: Any, *args: Any) -> None:
        """
        Format once, then walk up the ancestors. Every visited node whose
        threshold is met writes the record to its stream and its file; the
        walk stops at the first node that does not propagate.
        """
        record = self.render(level, msg, args)
        failures: List[Tuple[str, SinkError]] = []

        node: Optional[LoggerNode] = self
        while node is not None:
            with node._config_lock:
                if level >= node._level:
                    sinks: Tuple[Optional[Sink], ...] = (node._stream, node._file)
                    for sink in sinks:
                        if sink is None:
                            continue
                        try:
                            sink.write(record)
                        except SinkError as e:
                            failures.append((node.full_path, e))
                propagate = node._propagate
            if not propagate:
                break
            node = node.parent

        for path, e in failures:
            logger.warning(f"{path or '(root)'}: {e}")


class Logger:
    """
    Client handle to a logger node.

    Each handle owns one pin on its node. The pin is dropped by release()
    or by leaving a ``with`` block. A handle garbage collected without
    release() only queues its pin; the next registry call drops it.
    Handles for the same dotted name compare equal while they share a node.
    """

    def __init__(self, node: LoggerNode):
        self.node = node
        self._finalizer = weakref.finalize(self, _deferred_releases.append, node)
        self._finalizer.atexit = False

    @property
    def name(self) -> str:
        return self.node.full_path

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    def release(self) -> None:
        """Drop this handle's pin. Idempotent."""
        if self._finalizer.detach() is not None:
            self.node.release_pin()
        release_deferred()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Logger):
            return NotImplemented
        return self.node is other.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        return f"<Logger {self.name or '(root)'!r} level={self.node.get_level().name}>"

    # Logging
    def log(self, level: int, msg: Any, *args: Any) -> None:
        self.node.log(level, msg, *args)

    def critical(self, msg: Any, *args: Any) -> None:
        self.node.log(Level.CRITICAL, msg, *args)

    def error(self, msg: Any, *args: Any) -> None:
        self.node.log(Level.ERROR, msg, *args)

    def warning(self, msg: Any, *args: Any) -> None:
        self.node.log(Level.WARNING, msg, *args)

    def info(self, msg: Any, *args: Any) -> None:
        self.node.log(Level.INFO, msg, *args)

    def debug(self, msg: Any, *args: Any) -> None:
        self.node.log(Level.DEBUG, msg, *args)

    # Configuration
    def get_level(self) -> Level:
        return self.node.get_level()

    def set_level(self, level: int) -> Level:
        return self.node.set_level(level)

    def set_propagation(self, mode: bool) -> bool:
        return self.node.set_propagation(mode)

    def get_propagation(self) -> bool:
        return self.node.get_propagation()

    def get_stream(self) -> StreamKind:
        return self.node.get_stream()

    def set_stream(self, kind: int) -> StreamKind:
        return self.node.set_stream(kind)

    def set_logfile(self, path: Optional[str]) -> None:
        self.node.set_logfile(path)

    def get_logfile(self) -> str:
        return self.node.get_logfile()
