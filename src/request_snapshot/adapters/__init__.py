"""Framework adapters that turn caller conventions into normalizer input.

``request_snapshot.adapters.compat`` and ``request_snapshot.adapters.starlette``
import the normalizer and are therefore not imported here.
"""

from request_snapshot.adapters.context import request_from_context
from request_snapshot.adapters.flags import apply_request_flags

__all__ = [
    "apply_request_flags",
    "request_from_context",
]
