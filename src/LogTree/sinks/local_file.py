# ============================================================================
# LogTree - Local File Sink
#
# Purpose: Append records to a log file on the local filesystem
# Inputs: Record lines
# Outputs: Appended lines in the target file
# Dependencies: pathlib, base
# Usage: sink = LocalFileSink("run.log"); sink.write(record); sink.close()
#
# Changelog:
#   2026-09-02: Initial LocalFileSink
#   2026-09-10: Canonicalize paths so the same file reached through different
#               spellings (relative, symlinked) compares equal
#   2026-10-16: Paths the OS rejects outright (embedded NUL) raise SinkError
# ============================================================================

from pathlib import Path
from typing import Union

from LogTree.errors import SinkError
from LogTree.logging_utils import get_logger
from LogTree.sinks.base import Sink

logger = get_logger(__name__)


def resolve_log_path(path: Union[str, Path]) -> str:
    """
    Canonical absolute path of a log file, creating the file if missing.

    A missing file is created empty (truncate) and the path resolved again.

    Args:
        path: Log file path as given by the caller

    Returns:
        Absolute path with symlinks resolved

    Raises:
        SinkError: If the file cannot be created or resolved
    """
    target = Path(path)
    try:
        return str(target.resolve(strict=True))
    except FileNotFoundError:
        pass
    except (OSError, RuntimeError, ValueError) as e:
        raise SinkError(f"Cannot resolve log file path '{path}'", details=str(e)) from e

    try:
        with open(target, "w", encoding="utf-8"):
            pass
        return str(target.resolve(strict=True))
    except (OSError, ValueError) as e:
        raise SinkError(f"error opening log file '{path}'", details=getattr(e, "strerror", None) or str(e)) from e


class LocalFileSink(Sink):
    """
    Sink that appends records to a local file, flushing after every record.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize local file sink.

        Args:
            path: Log file path; canonicalized and created if missing

        Raises:
            SinkError: If the file cannot be opened for appending
        """
        self.path = resolve_log_path(path)
        try:
            self._file = open(self.path, "a", encoding="utf-8")
        except (OSError, ValueError) as e:
            raise SinkError(f"error opening log file '{path}'", details=getattr(e, "strerror", None) or str(e)) from e
        logger.debug(f"LocalFileSink opened: {self.path}")

    @property
    def closed(self) -> bool:
        return self._file.closed

    def write(self, record: str) -> None:
        try:
            self._file.write(record + "\n")
            self._file.flush()
        except (OSError, ValueError) as e:
            raise SinkError(f"Failed to write record to {self.path}", details=str(e)) from e

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()
            logger.debug(f"LocalFileSink closed: {self.path}")

    def __repr__(self) -> str:
        return f"LocalFileSink({self.path!r})"
