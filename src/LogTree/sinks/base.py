# ============================================================================
# LogTree - Base Sink Interface
#
# Purpose: Abstract base class for record output targets
# Inputs: Rendered record lines
# Outputs: None (side effect on the target)
# Dependencies: abc
# Usage: class MySink(Sink): ...
#
# Changelog:
#   2026-09-02: Initial Sink interface
# ============================================================================

from abc import ABC, abstractmethod


class Sink(ABC):
    """
    Abstract base class for record sinks.

    Sinks receive one fully rendered record line per call. Locking is the
    caller's job: a node holds its configuration lock around every write.
    """

    @abstractmethod
    def write(self, record: str) -> None:
        """
        Write a record line to the sink.

        Args:
            record: Rendered record line, without trailing newline

        Raises:
            SinkError: If write operation fails
        """
        pass

    def close(self) -> None:
        """Release any resource held by the sink. Safe to call more than once."""
        pass
