# ============================================================================
# LogTree - Module Registry
#
# Purpose: Resolve dotted module names to logger nodes, creating the chain
# Inputs: Dotted names ("NET.IF.ETH0"), optional level/stream overrides
# Outputs: Logger handles
# Dependencies: threading, config, node, logging_utils
# Usage: log = get_logger("ADDRESS", Level.WARNING, StreamKind.STDLOG)
#
# Changelog:
#   2026-09-02: Initial registry with lazily created root
#   2026-09-21: Lookup pins each segment under the parent's tree lock before
#               releasing the previous pin (hand-over-hand), so a segment
#               cannot be pruned while a lookup is passing through it
#   2026-09-30: reset_registry() teardown hook for test isolation
#   2026-10-16: Lookups first release pins queued by collected handles
# ============================================================================

import threading
from typing import List, Optional

from LogTree import logging_utils
from LogTree.config import Config
from LogTree.errors import InternalLoggerError
from LogTree.levels import UNCHANGED
from LogTree.node import Logger, LoggerNode, release_deferred

logger = logging_utils.get_logger(__name__)


class ModuleRegistry:
    """
    Owner of the root node and the name lookup protocol.

    The registry keeps no strong reference to anything below the root: nodes
    stay in the tree only while some handle pins them or one of their
    descendants.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config is not None else Config()
        self._root: Optional[LoggerNode] = None
        self._root_lock = threading.Lock()

    @property
    def root(self) -> LoggerNode:
        """The root node, created on first use."""
        with self._root_lock:
            if self._root is None:
                reg = self.config.registry
                root = LoggerNode(
                    "",
                    None,
                    level=reg.root_level_value,
                    propagate=False,
                    record_config=self.config.record,
                )
                root.set_stream(reg.root_stream_value)
                self._root = root
                logger.debug(f"root logger created (level={reg.root_level}, stream={reg.root_stream})")
            return self._root

    def get_root_logger(self, level: int = UNCHANGED, stream: int = UNCHANGED) -> Logger:
        """
        Handle to the root logger.

        Args:
            level: New root threshold, or UNCHANGED
            stream: New root stream, or UNCHANGED

        Returns:
            Logger handle pinning the root
        """
        release_deferred()
        root = self.root
        root.pin()
        handle = Logger(root)
        root.set_level(level)
        root.set_stream(stream)
        return handle

    def get_logger(self, name: Optional[str] = None, level: int = UNCHANGED, stream: int = UNCHANGED) -> Logger:
        """
        Resolve a dotted module name, creating missing segments.

        Names deeper than ``registry.max_module_subfields`` are cut: the
        lookup stops at that depth, logs an error through the deepest node
        and returns it.

        Args:
            name: Dotted module name; None or "" selects the root
            level: Threshold to apply to the resolved node, or UNCHANGED
            stream: Stream to apply to the resolved node, or UNCHANGED

        Returns:
            Logger handle pinning the resolved node

        Raises:
            InternalLoggerError: If the walk produced no node (logic bug)
        """
        if not name:
            return self.get_root_logger(level, stream)
        release_deferred()

        segments = name.split(".")
        limit = self.config.registry.max_module_subfields

        instance: Optional[LoggerNode] = self.root
        instance.pin()
        for segment in segments[:limit]:
            child = instance.pin_child(segment)
            instance.release_pin()
            instance = child

        if instance is None:
            raise InternalLoggerError(f"null instance returned for module {name}")

        handle = Logger(instance)
        if len(segments) > limit:
            logger.warning(f"max number of subfields exceeded ({len(segments)} > {limit}): {name!r}")
            handle.error("max number of subfields exceeded (%d > %d)", len(segments), limit)

        instance.set_level(level)
        instance.set_stream(stream)
        return handle

    def find(self, name: Optional[str]) -> Optional[LoggerNode]:
        """
        Look a node up without creating or pinning anything.

        Returns:
            The live node for `name`, or None if any segment is missing
        """
        node = self.root
        if not name:
            return node
        for segment in name.split("."):
            with node._tree_lock:
                child = node.children.get(segment)
            if child is None or child.pruned:
                return None
            node = child
        return node

    def paths(self) -> List[str]:
        """Full paths of every node currently in the tree, root first ("")."""
        release_deferred()
        result: List[str] = []
        pending = [self.root]
        while pending:
            node = pending.pop()
            result.append(node.full_path)
            with node._tree_lock:
                pending.extend(node.children[key] for key in sorted(node.children, reverse=True))
        return result

    def shutdown(self) -> None:
        """Close every open file sink in the tree."""
        release_deferred()
        with self._root_lock:
            root = self._root
        if root is None:
            return
        pending = [root]
        while pending:
            node = pending.pop()
            with node._tree_lock:
                pending.extend(node.children.values())
            node.close()


# ----------------------------------------------------------------------------
# Process-wide registry
# ----------------------------------------------------------------------------

_registry: Optional[ModuleRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> ModuleRegistry:
    """The process registry, created from the default configuration on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            config = Config.from_default()
            logging_utils.setup_logging(config.logging.level, config.logging.format)
            _registry = ModuleRegistry(config)
        return _registry


def reset_registry(config: Optional[Config] = None) -> None:
    """
    Tear down the process registry.

    Open files are closed. The next lookup builds a fresh root, from
    `config` when given, from the default configuration otherwise. Handles
    obtained before the reset keep working against the old tree.
    """
    global _registry
    with _registry_lock:
        old = _registry
        _registry = ModuleRegistry(config) if config is not None else None
    if old is not None:
        old.shutdown()


def get_logger(name: Optional[str] = None, level: int = UNCHANGED, stream: int = UNCHANGED) -> Logger:
    """Resolve `name` in the process registry. See ModuleRegistry.get_logger."""
    return get_registry().get_logger(name, level, stream)


def get_root_logger(level: int = UNCHANGED, stream: int = UNCHANGED) -> Logger:
    """Handle to the process root logger. See ModuleRegistry.get_root_logger."""
    return get_registry().get_root_logger(level, stream)
