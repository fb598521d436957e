"""Observability layer for request-snapshot.

Usage:
    from request_snapshot.observability import configure_logging, get_logger

    configure_logging(log_level="DEBUG", log_format="console")
    logger = get_logger(__name__)
"""

from request_snapshot.observability.constants import LogEvents
from request_snapshot.observability.logger import configure_logging, get_logger

__all__ = [
    "LogEvents",
    "configure_logging",
    "get_logger",
]
