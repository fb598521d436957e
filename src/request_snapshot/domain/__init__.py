"""Domain layer for request-snapshot."""

from request_snapshot.domain.exceptions import (
    ConfigurationError,
    ConflictingContextError,
    SnapshotError,
)

__all__ = [
    "ConfigurationError",
    "ConflictingContextError",
    "SnapshotError",
]
