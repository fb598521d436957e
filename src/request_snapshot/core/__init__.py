"""Core configuration for request-snapshot."""

from request_snapshot.core.config import Settings, get_settings
from request_snapshot.core.options import MaskOptions, NormalizeOptions

__all__ = [
    "MaskOptions",
    "NormalizeOptions",
    "Settings",
    "get_settings",
]
