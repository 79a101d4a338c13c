# ============================================================================
# LogTree - Error Classes
#
# Purpose: Custom exception hierarchy for the package
# Inputs: Error messages and context
# Outputs: Structured exceptions
# Dependencies: None
# Usage: raise SinkError("Failed to open log file")
#
# Changelog:
#   2026-09-02: Initial error classes
#   2026-09-21: Added InternalLoggerError for lookup invariant violations
# ============================================================================

from typing import Optional


class LogTreeError(Exception):
    """Base exception for all LogTree errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        """
        Initialize error.

        Args:
            message: Error message
            details: Optional detailed error information
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        """String representation."""
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ConfigurationError(LogTreeError):
    """Raised when configuration is invalid or missing."""

    pass


class SinkError(LogTreeError):
    """Raised when a sink cannot be opened or written."""

    pass


class InternalLoggerError(LogTreeError):
    """Raised when a logger lookup violates a tree invariant (a logic bug, not a runtime condition)."""

    pass
