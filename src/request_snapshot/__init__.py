"""Redacted, serialization-safe snapshots of HTTP requests and responses.

Usage:
    from request_snapshot import normalize

    snapshot = normalize(req={"method": "POST", "body": {"password": "hello"}})
    snapshot["request"]["body"]  # '{"password":"*****"}'
"""

from request_snapshot.adapters.compat import normalize_context, parse_request
from request_snapshot.core.options import MaskOptions, NormalizeOptions
from request_snapshot.domain.exceptions import (
    ConfigurationError,
    ConflictingContextError,
    SnapshotError,
)
from request_snapshot.masking.sensitive_fields import mask_props
from request_snapshot.masking.special_types import mask_special_types
from request_snapshot.normalizer import normalize
from request_snapshot.observability.constants import (
    DISABLE_BODY_PARSING,
    DISABLE_FILE_PARSING,
    DISABLE_QUERY_PARSING,
    SENSITIVE_FIELDS,
)

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "normalize",
    "normalize_context",
    "parse_request",
    # Masking passes
    "mask_props",
    "mask_special_types",
    # Options
    "MaskOptions",
    "NormalizeOptions",
    "SENSITIVE_FIELDS",
    "DISABLE_BODY_PARSING",
    "DISABLE_FILE_PARSING",
    "DISABLE_QUERY_PARSING",
    # Errors
    "ConfigurationError",
    "ConflictingContextError",
    "SnapshotError",
]
