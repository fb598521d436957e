"""Snapshot-specific exceptions."""

from __future__ import annotations


class SnapshotError(Exception):
    """Base exception for request-snapshot errors."""

    def __init__(self, message: str, error_code: str = "SNAPSHOT_ERROR"):
        """Initialize snapshot exception."""
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigurationError(SnapshotError):
    """Raised when the integrating adapter passes contradictory options."""

    def __init__(self, message: str):
        """Initialize configuration error."""
        super().__init__(message, "CONFIGURATION_ERROR")


class ConflictingContextError(ConfigurationError):
    """Raised when both a request and a context are supplied in one call."""

    def __init__(self) -> None:
        """Initialize conflicting context error."""
        super().__init__(
            "You must either use `req` (request style) or `ctx` (context style), but not both"
        )
