# ============================================================================
# LogTree - Package Initialization
#
# Purpose: Package-level exports and version information
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from LogTree import get_logger, Level, StreamKind
#
# Changelog:
#   2026-09-02: Initial package setup
# ============================================================================

__version__ = "0.2.0"
__license__ = "Apache-2.0"

from LogTree.config import Config
from LogTree.errors import ConfigurationError, InternalLoggerError, LogTreeError, SinkError
from LogTree.levels import UNCHANGED, Level
from LogTree.node import Logger, LoggerNode
from LogTree.registry import ModuleRegistry, get_logger, get_registry, get_root_logger, reset_registry
from LogTree.sinks.stream import StreamKind

NOTSET = Level.NOTSET
DEBUG = Level.DEBUG
INFO = Level.INFO
WARNING = Level.WARNING
ERROR = Level.ERROR
CRITICAL = Level.CRITICAL

DEVNULL = StreamKind.DEVNULL
STDOUT = StreamKind.STDOUT
STDERR = StreamKind.STDERR
STDLOG = StreamKind.STDLOG

__all__ = [
    "__version__",
    "Config",
    "ConfigurationError",
    "InternalLoggerError",
    "LogTreeError",
    "SinkError",
    "Level",
    "UNCHANGED",
    "StreamKind",
    "Logger",
    "LoggerNode",
    "ModuleRegistry",
    "get_logger",
    "get_root_logger",
    "get_registry",
    "reset_registry",
    "NOTSET",
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "DEVNULL",
    "STDOUT",
    "STDERR",
    "STDLOG",
]
